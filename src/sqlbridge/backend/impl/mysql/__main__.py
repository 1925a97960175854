# src/sqlbridge/backend/impl/mysql/__main__.py
import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation

from sqlbridge.backend.expression import identifier
from sqlbridge.backend.typing import DateBucket, TimeUnit
from .config import MySQLConnectionConfig
from .connection import DriverType
from .dialect import MySQLDialect
from .errors import classify_connection_error, ConnectionErrorCategory
from .types import resolve_column_type, storage_kind_for

logger = logging.getLogger(__name__)


def _number(text: str):
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return Decimal(text)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")


def _column(text: str):
    # "table.column" is rendered as a qualified identifier
    return identifier(*text.split('.'))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="python -m sqlbridge.backend.impl.mysql",
        description="Inspect MySQL dialect translations without a database connection.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument('--log-level', default='INFO', help='Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    map_type = subparsers.add_parser('map-type', help='Map a native column type name to its portable type')
    map_type.add_argument('native_type', help='Native type name, e.g. "INT UNSIGNED" or "VARCHAR(255)"')

    descriptor = subparsers.add_parser(
        'descriptor',
        help='Show the connection descriptor built from options and MYSQL_* environment variables'
    )
    # Connection parameters with defaults from environment variables
    descriptor.add_argument(
        '--host',
        default=None,
        help='Database host (default: MYSQL_HOST environment variable or localhost)'
    )
    descriptor.add_argument(
        '--port',
        type=int,
        default=None,
        help='Database port (default: MYSQL_PORT environment variable or 3306)'
    )
    descriptor.add_argument(
        '--database',
        default=None,
        help='Database name (optional, default: MYSQL_DATABASE environment variable)'
    )
    descriptor.add_argument(
        '--user',
        default=None,
        help='Database user (default: MYSQL_USER environment variable or root)'
    )
    descriptor.add_argument('--ssl', action='store_true', default=None, help='Require an encrypted connection')
    descriptor.add_argument(
        '--driver',
        choices=[driver.value for driver in DriverType],
        default=None,
        help='Driver the connect arguments are built for (default: mysql-connector)'
    )
    descriptor.add_argument(
        '--additional-options',
        default=None,
        help='Connection string style options, e.g. "connect_timeout=10&autocommit=true"'
    )

    trunc = subparsers.add_parser('trunc', help='Render the date bucketing expression for a column')
    trunc.add_argument('bucket', choices=[bucket.value for bucket in DateBucket])
    trunc.add_argument('column', type=_column, help='Column name, optionally qualified as table.column')

    interval = subparsers.add_parser('interval', help='Render adding an interval to a column')
    interval.add_argument('column', type=_column, help='Column name, optionally qualified as table.column')
    interval.add_argument('amount', type=_number)
    interval.add_argument('unit', choices=[unit.value for unit in TimeUnit])

    humanize = subparsers.add_parser('humanize', help='Translate a raw connection error message')
    humanize.add_argument('message')

    return parser.parse_args(argv)


def show_type(args):
    portable = resolve_column_type(args.native_type)
    print(json.dumps({
        'native_type': args.native_type,
        'portable_type': portable.value,
        'storage_kind': storage_kind_for(args.native_type).value,
    }, indent=2))


def show_descriptor(args):
    config = MySQLConnectionConfig.from_env(
        host=args.host,
        port=args.port,
        database=args.database,
        username=args.user,
        ssl=args.ssl,
        driver_type=DriverType(args.driver) if args.driver else None,
        additional_options=args.additional_options,
    )
    descriptor = config.to_descriptor()
    print(json.dumps({
        'url': descriptor.url,
        'driver': descriptor.driver.value,
        'classname': descriptor.classname,
        'subname': descriptor.subname,
        'user': descriptor.user,
        'encrypt': descriptor.encrypt,
        'properties': dict(descriptor.properties),
    }, indent=2, default=str))


def show_trunc(args, dialect):
    print(dialect.format_expression(dialect.date_trunc(args.bucket, args.column)))


def show_interval(args, dialect):
    print(dialect.format_expression(dialect.add_interval(args.column, args.amount, args.unit)))


def show_humanized(args):
    result = classify_connection_error(args.message)
    if isinstance(result, ConnectionErrorCategory):
        logger.debug(f"Classified connection error as {result.value}")
        print(result.message)
    else:
        print(result)


def main(argv=None):
    args = parse_args(argv)

    # Set logging level
    numeric_level = getattr(logging, args.log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {args.log_level}')
    logging.basicConfig(level=numeric_level, format='%(asctime)s - %(levelname)s - %(message)s')

    dialect = MySQLDialect()
    try:
        if args.command == 'map-type':
            show_type(args)
        elif args.command == 'descriptor':
            show_descriptor(args)
        elif args.command == 'trunc':
            show_trunc(args, dialect)
        elif args.command == 'interval':
            show_interval(args, dialect)
        elif args.command == 'humanize':
            show_humanized(args)
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid input: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
