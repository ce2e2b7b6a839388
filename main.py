from rich.pretty import pprint

from vmargs import *

__prog__ = "firecracker"


if __name__ == '__main__':
    values = main(fancy=True)
    if values is not None:
        pprint(values)
