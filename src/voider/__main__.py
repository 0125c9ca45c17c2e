from voider.adapters.textual.app import main

raise SystemExit(main())
