from gitstat.cli import main

raise SystemExit(main())
