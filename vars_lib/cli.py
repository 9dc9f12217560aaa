"""Command line interface for vars.

Standalone usage::

    vars init <name> [scope]
    vars set <name> [scope] <key> <value>
    vars unset <name> [scope] <key>
    vars get <name> [scope] <key>
    vars data <name> [scope]
    vars keys <name> [scope]
    vars edit <name> [scope]

Host applications can also mount a ``vars`` command bound to their own
namespace with `add_app_commands`.
"""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from vars_lib.config.config import VarsConfig, load_config
from vars_lib.errors import VarsError
from vars_lib.logging_config import configure_logging
from vars_lib.storage.paths import PathResolver
from vars_lib.storage.store import Vars

logger = logging.getLogger(__name__)

# Handler signature: (store, operation args, config) -> None
Handler = Callable[[Vars, List[str], VarsConfig], None]


def parse_context(context_args: Sequence[str]) -> Tuple[str, List[str]]:
    """Split ``[name, scope?]`` into the namespace and a scope list."""
    namespace = context_args[0]
    scope = [context_args[1]] if len(context_args) > 1 else []
    return namespace, scope


def _cmd_init(store: Vars, _: List[str], cfg: VarsConfig) -> None:
    store.init()
    print("Initialized vars properties")


def _cmd_set(store: Vars, args: List[str], cfg: VarsConfig) -> None:
    store.set(args[0], args[1])


def _cmd_unset(store: Vars, args: List[str], cfg: VarsConfig) -> None:
    store.unset(args[0])


def _cmd_get(store: Vars, args: List[str], cfg: VarsConfig) -> None:
    print(store.get(args[0]))


def _cmd_data(store: Vars, _: List[str], cfg: VarsConfig) -> None:
    data = store.all()
    for key in sorted(data):
        print(f"{key}={data[key]}")


def _cmd_keys(store: Vars, _: List[str], cfg: VarsConfig) -> None:
    for key in store.keys():
        print(key)


def _cmd_edit(store: Vars, _: List[str], cfg: VarsConfig) -> None:
    store.edit(default_editor=cfg.default_editor)


# name -> (handler, operation arg names, help, aliases)
COMMANDS: Dict[str, Tuple[Handler, Tuple[str, ...], str, Tuple[str, ...]]] = {
    "init": (_cmd_init, (), "Initialize vars (required before use)", ()),
    "set": (_cmd_set, ("key", "value"), "Set a variable for a specific property", ()),
    "unset": (_cmd_unset, ("key",), "Unset a variable property key value", ()),
    "get": (_cmd_get, ("key",), "Get a variable from a specific vars property value", ()),
    "data": (_cmd_data, (), "Print all vars for the given name", ()),
    "keys": (_cmd_keys, (), "List all keys for the given vars name", ("k",)),
    "edit": (_cmd_edit, (), "Edit the vars file in the default editor", ()),
}


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="vars", description="Manage stateful properties for any application")
    p.add_argument("--state-dir", help="State root directory (overrides XDG_STATE_HOME)")
    p.add_argument("--config", type=Path, help="Path to the YAML config file")
    p.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)")
    sub = p.add_subparsers(dest="command", metavar="<command>")
    sub.required = True
    for name, (handler, op_args, help_text, aliases) in COMMANDS.items():
        usage_args = " ".join(f"<{a}>" for a in op_args)
        usage = f"vars {name} <name> [scope] {usage_args}".rstrip()
        sp = sub.add_parser(name, aliases=list(aliases), help=help_text, usage=usage)
        sp.add_argument("args", nargs="*", metavar="arg", help="<name> [scope] followed by the command arguments")
        sp.set_defaults(handler=handler, op_arity=len(op_args), subparser=sp)
    return p


def split_args(parser: argparse.ArgumentParser, args: List[str], op_arity: int) -> Tuple[str, List[str], List[str]]:
    """Split positional args into namespace, scope list and operation args.

    The context is one or two leading tokens; anything else is a usage error.
    """
    context_len = len(args) - op_arity
    if context_len not in (1, 2):
        parser.error(f"expected {op_arity + 1} or {op_arity + 2} arguments, got {len(args)}")
    namespace, scope = parse_context(args[:context_len])
    return namespace, scope, args[context_len:]


def run(handler: Handler, store: Vars, op_args: List[str], cfg: VarsConfig) -> int:
    try:
        handler(store, op_args, cfg)
    except (VarsError, OSError) as e:
        logger.debug("Command failed for %s: %r", store.target, e)
        print(str(e), file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = get_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    cfg = load_config(args.config)
    configure_logging(args.log_level, cfg)
    resolver = PathResolver(root=args.state_dir or cfg.state_dir)

    namespace, scope, op_args = split_args(args.subparser, args.args, args.op_arity)
    store = Vars(namespace, *scope, resolver=resolver)
    return run(args.handler, store, op_args, cfg)


def add_app_commands(
    subparsers: "argparse._SubParsersAction",
    app_name: str,
    resolver: Optional[PathResolver] = None,
) -> argparse.ArgumentParser:
    """Register a ``vars`` command for a host application's own namespace.

    The host dispatches with `run_app_command(args)` after parsing. Only
    ``init``, ``set`` and ``get`` are exposed; the namespace is `app_name`.
    """
    vp = subparsers.add_parser("vars", help=f"Manage variables for {app_name}")
    vsub = vp.add_subparsers(dest="vars_command", metavar="<command>")
    vsub.required = True

    def bind(name: str, help_text: str, op_args: Tuple[str, ...]) -> None:
        sp = vsub.add_parser(name, help=help_text)
        for a in op_args:
            sp.add_argument(a)
        sp.set_defaults(
            vars_handler=COMMANDS[name][0],
            vars_op_args=op_args,
            vars_store=lambda: Vars(app_name, resolver=resolver),
        )

    bind("init", f"Initialize empty vars file for {app_name}", ())
    bind("set", "Set a variable", ("key", "value"))
    bind("get", "Get a variable", ("key",))
    return vp


def run_app_command(args: argparse.Namespace, config: Optional[VarsConfig] = None) -> int:
    op_args = [getattr(args, a) for a in args.vars_op_args]
    return run(args.vars_handler, args.vars_store(), op_args, config or VarsConfig())
