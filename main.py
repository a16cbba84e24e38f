import sys

from rich.console import Console
from rich.pretty import pprint

from terranaut import *

__prog__ = "terranaut"


plan = Plan(
    "./stacks/network",
    Options(out="network.plan", detailed_exitcode=True, echo=True),
    binary="/opt/terraform/terraform-1.2.0",
)


if __name__ == '__main__':
    pprint(plan)
    pprint(plan.compile())
    try:
        sys.exit(plan.execute())
    except CommandException as fault:
        Console(stderr=True).print(fault)
        sys.exit(1)
