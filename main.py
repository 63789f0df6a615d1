from rich.pretty import pprint

from switchboard import *
from switchboard.help import show

options = [
    Option("file", "-F", "--file", description="log file to read", arity=(1, 0), required=True),
    Option("verbose", "-v", description="print more details"),
    Option("level", "-l", type=int, arity=1, default=1),
    Option("tags", "-t", arity=(1, -1), on_multiple="append"),
]


if __name__ == '__main__':
    import sys

    tokens = sys.argv[1:]
    try:
        values = Parser(tokens, options).parse()
    except ParserError as error:
        show(options)
        report(error, exit=True)
    pprint(values)
    pprint(tokens)
