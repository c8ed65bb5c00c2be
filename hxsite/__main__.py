from hxsite.cli import main

raise SystemExit(main())
