from pizzastore.app import main

raise SystemExit(main())
