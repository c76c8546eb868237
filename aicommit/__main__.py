from aicommit.cli.main import main

raise SystemExit(main())
