"""
Main entry point for sql2dsql. Accessed by 'sql2dsql' in the command line.
"""
from functools import update_wrapper
from pathlib import Path
import sys
import webbrowser
import click

from sql2dsql import __version__
from sql2dsql.core.errors import TranslationError
from sql2dsql.core.pretty import reformat
from sql2dsql.core.runtime import build_runtime, Runtime

def pass_runtime(f):
    """
    Decorator to pass a Runtime to Click commands that need it.
    Ensures a Runtime is created and passed as the first argument.
    """
    @click.pass_context
    def new_func(ctx: click.Context, *args, **kwargs):
        ctx.ensure_object(dict)
        rt = ctx.obj.get('rt')
        if rt is None:
            opts = ctx.obj.get('global_opts', {})  # user overrides
            rt = build_runtime(**opts)
            ctx.obj['rt'] = rt
        return f(ctx.obj['rt'], *args, **kwargs)
    return update_wrapper(new_func, f)

@click.group()
@click.option('--backend-url', default=None,
              help="Translation endpoint, e.g. http://localhost:3000/to_dsql.")
@click.option('--settings-dir', type=click.Path(path_type=Path), default=None,
              help="Directory holding settings.json.")
@click.option('-v', '--verbose', is_flag=True, default=False,
              help="Very very detailed logging for debugging purposes.")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx, backend_url, settings_dir, verbose):
    """sql2dsql: translate SQL to DSQL and lay out the result."""
    ctx.ensure_object(dict)
    ctx.obj['global_opts'] = {
        'backend_url': backend_url,
        'settings_dir': settings_dir,
        'verbose': verbose,
    }

@main.command()
@pass_runtime
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=None)
@click.option("--reload", is_flag=True, default=False,
              help="Enable auto-reload for development; code changes are live-reloaded.")
@click.option("--no-browser", is_flag=True, default=False,
              help="Don't open a browser tab.")
def ui(rt: Runtime, host: str, port: int | None, reload: bool, no_browser: bool):
    """Launch the sql2dsql web editor."""
    # pylint: disable=import-outside-toplevel
    from sql2dsql.web.app import run_ui, pick_free_port, make_url
    click.echo("sql2dsql web UI is starting...")
    if port is None:
        port = pick_free_port(host, port)
    if not no_browser:
        webbrowser.open_new_tab(make_url(host, port))
    if reload:
        from sql2dsql.web.app import run_ui_reload
        run_ui_reload(rt, host=host, port=port)
    else:
        run_ui(rt, host=host, port=port)

@main.command()
@pass_runtime
@click.argument("sql", required=False)
@click.option("--file", "-f", "sql_file", type=click.File("r", encoding="utf-8"), default=None,
              help="Read SQL from a file ('-' for stdin).")
@click.option("--raw", is_flag=True, default=False,
              help="Print the backend reply without reformatting it.")
def translate(rt: Runtime, sql: str | None, sql_file, raw: bool):
    """
    Translate SQL to DSQL through the backend.

    Example: sql2dsql translate "SELECT * FROM table1 WHERE element > 30;"
    """
    if sql is None:
        if sql_file is None:
            sql_file = click.get_text_stream("stdin")
        sql = sql_file.read()
    if raw:
        try:
            click.echo(rt.client.translate(sql))
        except TranslationError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        return
    s = rt.create_session()
    s.source = sql
    if not s.process(rt.client):
        click.echo(s.output, err=True)
        sys.exit(1)
    click.echo(s.output)

@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
def pretty(source):
    """
    Lay out compact DSQL text from a file (or stdin).

    Example: echo "[{a 1, b 2} {a 1, b 2}]" | sql2dsql pretty
    """
    # a file's final newline is transport, not content
    click.echo(reformat(source.read().rstrip("\r\n")))

@main.command()
@pass_runtime
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE",
              help="Update a setting and save it (repeatable).")
def settings(rt: Runtime, assignments: tuple[str, ...]):
    """
    Show or update the saved settings.

    Example: sql2dsql settings --set backend_url=http://localhost:3000/to_dsql
    """
    for item in assignments:
        if "=" not in item:
            raise click.BadParameter(f"'{item}' must be key=value", param_hint="--set")
        k, v = item.split("=", 1)
        try:
            rt.settings.update(k.strip(), v)
        except (KeyError, ValueError) as e:
            raise click.BadParameter(str(e), param_hint="--set") from e
    if assignments:
        path = rt.save_settings()
        click.echo(f"Saved settings to {path}")
    for key, value in rt.settings.to_dict().items():
        click.echo(f"{key} = {value}")
