"""
sql2dsql: a thin client for a SQL to DSQL translation service.

The service answers with a compact, single-line rendering of records; this
package lays it out for humans (see sql2dsql.core.pretty) and serves it
through both a CLI and a small web editor.
"""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("sql2dsql")
except PackageNotFoundError:
    __version__ = "unknown"
__app_name__ = "sql2dsql"
