import sys

from listing_matcher.main import main

sys.exit(main())
