from alert_trigger.cli import main

raise SystemExit(main())
