#!/usr/bin/env python3
from staticblog.cli import main

if __name__ == "__main__":
    main()
