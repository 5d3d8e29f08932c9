from rich.pretty import pprint

from cali import *


parser = ArgumentParser(fancy=True)
parser.register("v", "verbose", "print more output")
parser.register("c", "count", "how many times to run", True, kind=ValueKind.NUMBER)
parser.register("o", "output", "where to write, stdout when omitted", True, True)


if __name__ == '__main__':
    pprint(invoke(parser, shell=True))
