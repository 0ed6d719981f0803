import sys

from tiktok_hashtags.main import main

if __name__ == "__main__":
    sys.exit(main())
