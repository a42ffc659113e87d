from openapi_aggregator.cli import main

raise SystemExit(main())
