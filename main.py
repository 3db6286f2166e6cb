from rich.pretty import pprint

from helmsman import *
from helmsman.display import prettify

registry = verify([
    Definition.parse("do things [what]"),
    Definition.parse("do things well <how>", options=[Option("-f", "--force")]),
    Definition.parse("list [paths...]", aliases=["ls"], options=[Option("-a", "--all")], types={"all": bool}),
    Definition("", catchall=True, arguments=[Argument("words", variadic=True)]),
])


if __name__ == '__main__':
    print(prettify([definition.name or "<catch-all>" for definition in registry]))
    for prompt in ("do things well slowly --force | sort", "ls -a src", "do things well", "do"):
        parsed = parse(prompt, registry)
        pprint(parsed)
        if isinstance(parsed.outcome, NeedsHelp):
            trigger(parsed.outcome.fault(), shell=True, colorful=True)
        elif parsed.outcome is None:
            trigger(unknown(parsed.resolution), shell=True, fancy=True, colorful=True)
