"""cgmon command line helpers.
"""

import functools
import importlib
import logging
import logging.config
import pkgutil
import sys
import traceback

import click

from cgmon import logging as cgmon_logging


EXIT_CODE_DEFAULT = 1

#: Output format of the formatters, set by the top level --outfmt option
OUTPUT_FORMAT = None

_LOGGER = logging.getLogger(__name__)


def init_logger(name):
    """Initialize logger.
    """
    try:
        # logging configuration files in json format
        conf = cgmon_logging.load_logging_conf(name)
        logging.config.dictConfig(conf)
    except (OSError, ValueError):
        traceback.print_exc(file=sys.stderr)
        click.echo('Error parsing log conf: {name}'.format(name=name),
                   err=True)


def make_commands(section, **click_args):
    """Make a Click multicommand from all submodules of the module."""

    class MCommand(click.Group):
        """cgmon CLI driver."""

        def __init__(self, *args, **kwargs):
            if kwargs and click_args:
                kwargs.update(click_args)

            click.Group.__init__(self, *args, **kwargs)

        def list_commands(self, ctx):
            """Return list of commands in section."""
            package = importlib.import_module(section)
            return sorted(
                name for _finder, name, _ispkg
                in pkgutil.iter_modules(package.__path__)
                if not name.startswith('_')
            )

        def get_command(self, ctx, cmd_name):
            """Return dymanically constructed command."""
            if cmd_name not in self.list_commands(ctx):
                raise click.UsageError('Invalid command: %s' % cmd_name)

            module = importlib.import_module(
                '{}.{}'.format(section, cmd_name)
            )
            return module.init()

    return MCommand


def out(string, *args):
    """Print to stdout."""
    if args:
        string = string % args

    click.echo(string)


def handle_exceptions(exclist):
    """Decorator that will handle exceptions and output friendly messages.

    :param ``list`` exclist:
        List of ``(exception class, handler)``, the handler being a message,
        ``None`` (print the exception) or a callable building the message.
    """

    def wrap(f):
        """Returns decorator that wraps/handles exceptions."""

        @functools.wraps(f)
        def _handle_any(*args, **kwargs):
            """Default exception handler."""
            try:
                return f(*args, **kwargs)

            except click.UsageError as usage_err:
                click.echo('Usage error: %s' % str(usage_err), err=True)
                sys.exit(EXIT_CODE_DEFAULT)

            except Exception as err:  # pylint: disable=W0703
                for exc, handler in exclist:
                    if not isinstance(err, exc):
                        continue

                    if isinstance(handler, str):
                        click.echo(handler, err=True)
                    elif handler is None:
                        click.echo(str(err), err=True)
                    else:
                        click.echo(handler(err), err=True)
                    sys.exit(EXIT_CODE_DEFAULT)

                _LOGGER.debug('Unhandled error', exc_info=True)
                click.echo('Error: %s' % err, err=True)
                sys.exit(EXIT_CODE_DEFAULT)

        return _handle_any

    return wrap


def make_formatter(pretty_formatter):
    """Makes a formatter."""

    def _format(item):
        """Formats the object given global format setting."""
        how = OUTPUT_FORMAT or pretty_formatter
        try:
            fmt = importlib.import_module(
                'cgmon.formatter.{}fmt'.format(how)
            ).Default
        except ImportError:
            return str(item)

        return fmt.format(item)

    return _format


def bad_exit(string, *args):
    """System exit non-zero with a string to sys.stderr.

    The printing takes care of the newline"""
    if args:
        string = string % args

    click.echo(string, err=True)
    sys.exit(-1)
