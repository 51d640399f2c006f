from pypolyfit.cli import main

raise SystemExit(main())
