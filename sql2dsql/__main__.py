"""Allows `python -m sql2dsql`."""
from sql2dsql.cli import main

if __name__ == "__main__":
    main()  # pylint: disable=no-value-for-parameter
