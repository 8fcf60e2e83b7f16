"""Allow ``python -m factory_helper`` as an alias for the ``factory-helper`` command."""

from factory_helper.main import main

raise SystemExit(main())
