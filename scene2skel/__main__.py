from scene2skel.cli import main

raise SystemExit(main())
