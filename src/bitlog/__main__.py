import sys

from bitlog.main import main

sys.exit(main())
