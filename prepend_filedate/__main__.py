import sys

from prepend_filedate.main import main

sys.exit(main())
