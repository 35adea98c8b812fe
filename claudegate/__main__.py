# -*- coding: utf-8 -*-
from .cli.main import main

if __name__ == "__main__":
    main()  # pylint: disable=no-value-for-parameter
