"""
Command-line entry for the deblurkit package.

Usage
-----
$ python -m deblurkit --help
"""

from .cli.diagnostics import main

if __name__ == "__main__":
    main(prog_name="deblurkit")
