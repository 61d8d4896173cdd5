from lambda_lift_launcher.cli import main

raise SystemExit(main())
