"""Command-line interface entry point for ksw."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from kswitch import __version__
from kswitch.core.annotations import Annotations
from kswitch.core.exceptions import (
    AliasNotFoundError,
    AmbiguousContextError,
    ConfigError,
    ContextNotFoundError,
    GroupNotFoundError,
    KswitchError,
)
from kswitch.core.kube import KubectlClient, resolve_context
from kswitch.core.runtime import ConfigManager
from kswitch.core.selector import Outcome, Selector
from kswitch.models.config import KswConfig
from kswitch.ui_textual.picker_app import run_picker
from kswitch.ui_textual.style_tokens import (
    ACTIVE_DOT,
    ALIAS,
    ARROW,
    DIM_GREY,
    ERROR,
    PIN,
    PIN_ICON,
    STATUS_ICONS,
    SUCCESS,
    WARNING,
)

logger = logging.getLogger(__name__)

KNOWN_SUBCOMMANDS = {"alias", "pin", "group", "history", "rename", "config"}
OPTIONS_WITH_VALUE = ("-g", "--group")

OK = f"[bold {SUCCESS}]{STATUS_ICONS['success']}[/bold {SUCCESS}]"
FAIL = f"[{ERROR}]{STATUS_ICONS['error']}[/{ERROR}]"
DOT = f"[{DIM_GREY}]{STATUS_ICONS['info']}[/{DIM_GREY}]"


def _alias_tag(alias: str) -> str:
    return f" [bold {ALIAS}]@{escape(alias)}[/bold {ALIAS}]" if alias else ""


def _first_alias_tag(config: KswConfig, context: str) -> str:
    aliases = config.aliases_for(context)
    return _alias_tag(aliases[0]) if aliases else ""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ksw",
        description="ksw - Interactive Kubernetes context switcher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ksw                          # Launch interactive selector (fuzzy search)
  ksw <name>                   # Switch directly to context <name>
  ksw @<alias>                 # Switch using an alias
  ksw -                        # Switch back to the previous context
  ksw alias <name> <context>   # Create alias for a context
  ksw pin add <context>        # Pin a context to the top of the list
  ksw group add dev -dev       # Group every context containing "-dev"
  ksw -g dev                   # Pick among the "dev" group only

Navigation:
  Type                Filter contexts with fuzzy search
  Up / Down           Move up / down
  Home / End          Go to top / bottom
  PgUp / PgDn         Jump 10 items
  Backspace           Delete last character from filter
  Enter               Switch to highlighted context
  Ctrl+P              Pin / unpin highlighted context
  Ctrl+T              Jump to first pinned context
  Ctrl+O              Show pinned contexts only
  Ctrl+S              Toggle short names
  Esc                 Clear filter / Quit
  Ctrl+C              Quit

Settings are stored in ~/.ksw.json (override with KSW_CONFIG).
        """,
    )

    parser.add_argument("--version", "-V", action="version", version=f"ksw v{__version__}")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging",
    )
    parser.add_argument(
        "--list",
        "-l",
        action="store_true",
        help="List contexts (non-interactive)",
    )
    parser.add_argument(
        "--group",
        "-g",
        metavar="NAME",
        help="Restrict the interactive selector to a group",
    )
    parser.add_argument(
        "--pinned",
        action="store_true",
        help="Start the interactive selector showing pinned contexts only",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # alias
    alias_parser = subparsers.add_parser(
        "alias",
        help="Manage context aliases",
        description="ksw alias ls | rm <name> | <name> [context]",
    )
    alias_parser.add_argument(
        "alias_args", nargs="+", metavar="ARG", help="ls, rm <name>, or <name> [context]"
    )

    # pin
    pin_parser = subparsers.add_parser("pin", help="Manage pinned contexts")
    pin_subparsers = pin_parser.add_subparsers(dest="pin_command", help="Pin operations")
    pin_subparsers.add_parser("ls", help="List pinned contexts")
    pin_add = pin_subparsers.add_parser("add", help="Pin a context")
    pin_add.add_argument("context", help="Context name, short name or unique fragment")
    pin_rm = pin_subparsers.add_parser("rm", help="Unpin a context")
    pin_rm.add_argument("context", help="Pinned context name, short name or unique fragment")

    # group
    group_parser = subparsers.add_parser("group", help="Manage context groups")
    group_subparsers = group_parser.add_subparsers(dest="group_command", help="Group operations")
    group_subparsers.add_parser("ls", help="List groups")
    group_add = group_subparsers.add_parser(
        "add", help="Create a group from every context containing a pattern"
    )
    group_add.add_argument("name", help="Group name")
    group_add.add_argument("pattern", help="Case-insensitive substring to match")
    group_add_ctx = group_subparsers.add_parser(
        "add-ctx", help="Add one context to a group (created if needed)"
    )
    group_add_ctx.add_argument("name", help="Group name")
    group_add_ctx.add_argument("context", help="Context name, short name or unique fragment")
    group_rm = group_subparsers.add_parser("rm", help="Remove one or more groups")
    group_rm.add_argument("names", nargs="+", help="Group names")

    # history
    history_parser = subparsers.add_parser(
        "history", help="Show recently used contexts or switch to one"
    )
    history_parser.add_argument("entry", nargs="?", type=int, help="Switch to history entry N")

    # rename
    rename_parser = subparsers.add_parser("rename", help="Rename a context")
    rename_parser.add_argument("old", help="Context name, short name or unique fragment")
    rename_parser.add_argument("new", help="New context name")

    # config
    config_parser = subparsers.add_parser("config", help="Inspect ksw configuration")
    config_subparsers = config_parser.add_subparsers(
        dest="config_command", help="Config operations"
    )
    config_subparsers.add_parser("show", help="Display current configuration")
    config_subparsers.add_parser("path", help="Print the config file location")

    return parser


def _split_target(argv: list[str]) -> tuple[list[str], Optional[str]]:
    """Separate a bare ``ksw <name>`` target from the remaining arguments."""
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in OPTIONS_WITH_VALUE:
            i += 2
        elif arg == "-":
            return argv[:i] + argv[i + 1 :], arg
        elif arg.startswith("-"):
            i += 1
        elif arg in KNOWN_SUBCOMMANDS:
            return argv, None
        else:
            return argv[:i] + argv[i + 1 :], arg
    return argv, None


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("kswitch")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the ksw CLI."""
    argv = list(sys.argv[1:] if argv is None else argv)
    argv, target = _split_target(argv)

    parser = _build_parser()
    args = parser.parse_args(argv)
    if target is not None and (args.list or args.group is not None or args.pinned):
        parser.error(f"cannot switch to '{target}' together with --list, --group or --pinned")
    _configure_logging(args.verbose)

    console = Console()
    err_console = Console(stderr=True)

    manager = ConfigManager()
    kube = KubectlClient()

    try:
        config = manager.load()

        if args.command == "alias":
            _handle_alias_command(args, manager, config, console)
        elif args.command == "pin":
            _handle_pin_command(args, manager, config, kube, console)
        elif args.command == "group":
            _handle_group_command(args, manager, config, kube, console)
        elif args.command == "history":
            _handle_history_command(args, manager, config, kube, console)
        elif args.command == "rename":
            _handle_rename_command(args, manager, config, kube, console)
        elif args.command == "config":
            _handle_config_command(args, manager, config, console)
        elif args.list:
            _list_contexts(config, kube, console)
        elif target == "-":
            previous = config.previous_context(kube.current_context())
            if previous is None:
                raise KswitchError("No previous context in history.")
            _switch_to(previous, manager, config, kube, console)
        elif target and target.startswith("@"):
            alias = target[1:]
            if alias not in config.aliases:
                raise AliasNotFoundError(alias)
            _switch_to(config.aliases[alias], manager, config, kube, console, via_alias=alias)
        elif target:
            _switch_to(target, manager, config, kube, console)
        else:
            _run_interactive(args, manager, config, kube, console)

    except KeyboardInterrupt:
        err_console.print(f"\n[{WARNING}]Interrupted.[/{WARNING}]")
        sys.exit(130)
    except KswitchError as e:
        err_console.print(f"{FAIL} {escape(str(e))}")
        matches = getattr(e, "matches", None)
        if matches:
            for match in matches:
                err_console.print(f"  {escape(match)}")
        if args.verbose:
            import traceback

            err_console.print(traceback.format_exc())
        sys.exit(1)


# ============================================================================
# Switching
# ============================================================================


def _save_quietly(manager: ConfigManager, config: KswConfig, console: Console) -> None:
    """Save after a switch already happened; a failed write only warns."""
    try:
        manager.save(config)
    except ConfigError as exc:
        logger.warning("%s", exc)
        console.print(f"[{WARNING}]{escape(str(exc))}[/{WARNING}]")


def _commit_switch(
    chosen: str,
    current: str,
    manager: ConfigManager,
    config: KswConfig,
    kube: KubectlClient,
    console: Console,
    via_alias: str = "",
) -> None:
    if chosen == current:
        console.print(f"{DOT} Already on {escape(current)}")
        return

    kube.use_context(chosen)
    config.record_history(current, chosen)
    _save_quietly(manager, config, console)

    tag = _alias_tag(via_alias) if via_alias else _first_alias_tag(config, chosen)
    console.print(f"{OK} Switched to {escape(chosen)}{tag}")


def _switch_to(
    name: str,
    manager: ConfigManager,
    config: KswConfig,
    kube: KubectlClient,
    console: Console,
    via_alias: str = "",
) -> None:
    contexts = kube.list_contexts()
    try:
        chosen = resolve_context(name, contexts)
    except ContextNotFoundError:
        if via_alias:
            raise KswitchError(
                f"Context '{name}' (alias @{via_alias}) not found in kubeconfig."
            ) from None
        raise
    except AmbiguousContextError as exc:
        if via_alias:
            raise AmbiguousContextError(name, exc.matches, alias=via_alias) from None
        raise
    _commit_switch(chosen, kube.current_context(), manager, config, kube, console, via_alias)


def _run_interactive(
    args: argparse.Namespace,
    manager: ConfigManager,
    config: KswConfig,
    kube: KubectlClient,
    console: Console,
) -> None:
    contexts = kube.list_contexts()
    if not contexts:
        raise KswitchError("No contexts found in kubeconfig.")
    if args.group is not None and args.group not in config.groups:
        raise GroupNotFoundError(args.group)

    current = kube.current_context()
    annotations = Annotations.from_config(config, current, group=args.group)

    def persist(pins: list[str], short_names: bool) -> None:
        config.pins = pins
        config.short_names = short_names
        manager.save(config)

    selector = Selector(
        contexts,
        annotations,
        short_names=config.short_names,
        pinned_only=args.pinned,
        persist=persist,
    )
    result = run_picker(selector)

    if result.outcome is Outcome.COMMITTED and result.chosen:
        _commit_switch(result.chosen, current, manager, config, kube, console)


def _list_contexts(config: KswConfig, kube: KubectlClient, console: Console) -> None:
    contexts = kube.list_contexts()
    current = kube.current_context()
    for context in contexts:
        alias = _first_alias_tag(config, context)
        pin = f" [{PIN}]{PIN_ICON}[/{PIN}]" if config.is_pinned(context) else ""
        if context == current:
            console.print(
                f"[bold {SUCCESS}]▸ {escape(context)}[/bold {SUCCESS}]{alias}{pin} "
                f"[{SUCCESS}]{ACTIVE_DOT}[/{SUCCESS}]"
            )
        else:
            console.print(f"  {escape(context)}{alias}{pin}")


# ============================================================================
# Subcommands
# ============================================================================


def _handle_alias_command(
    args: argparse.Namespace, manager: ConfigManager, config: KswConfig, console: Console
) -> None:
    """Handle ``ksw alias ls | rm <name> | <name> [context]``."""
    sub, *rest = args.alias_args

    if sub in ("ls", "list"):
        if not config.aliases:
            console.print(
                f"[{DIM_GREY}]No aliases configured. Use: ksw alias <name> <context>[/{DIM_GREY}]"
            )
            return
        for name in sorted(config.aliases):
            console.print(f" {_alias_tag(name)} {ARROW} {escape(config.aliases[name])}")
        return

    if sub in ("rm", "remove", "delete"):
        if not rest:
            raise KswitchError("Usage: ksw alias rm <name>")
        name = rest[0]
        if name not in config.aliases:
            raise AliasNotFoundError(name)
        del config.aliases[name]
        manager.save(config)
        console.print(f"{OK} Removed alias{_alias_tag(name)}")
        return

    name = sub.lstrip("@")
    if not rest:
        if name not in config.aliases:
            raise KswitchError("Usage: ksw alias <name> <context>")
        console.print(f" {_alias_tag(name)} {ARROW} {escape(config.aliases[name])}")
        return

    config.aliases[name] = rest[0]
    manager.save(config)
    console.print(f"{OK} Alias{_alias_tag(name)} {ARROW} {escape(rest[0])}")


def _handle_pin_command(
    args: argparse.Namespace,
    manager: ConfigManager,
    config: KswConfig,
    kube: KubectlClient,
    console: Console,
) -> None:
    """Handle ``ksw pin ls | add | rm``."""
    if not args.pin_command or args.pin_command == "ls":
        if not config.pins:
            console.print(f"[{DIM_GREY}]No pinned contexts. Use: ksw pin add <context>[/{DIM_GREY}]")
            return
        for pin in config.pins:
            console.print(f"  [{PIN}]{PIN_ICON}[/{PIN}] {escape(pin)}{_first_alias_tag(config, pin)}")
        return

    if args.pin_command == "add":
        context = resolve_context(args.context, kube.list_contexts())
        if config.is_pinned(context):
            console.print(f"{DOT} Already pinned {escape(context)}")
            return
        config.toggle_pin(context)
        manager.save(config)
        console.print(f"{OK} Pinned {escape(context)}")
        return

    if args.pin_command == "rm":
        try:
            context = resolve_context(args.context, config.pins)
        except ContextNotFoundError:
            raise KswitchError(f"'{args.context}' not pinned") from None
        config.toggle_pin(context)
        manager.save(config)
        console.print(f"{OK} Unpinned {escape(context)}")


def _handle_group_command(
    args: argparse.Namespace,
    manager: ConfigManager,
    config: KswConfig,
    kube: KubectlClient,
    console: Console,
) -> None:
    """Handle ``ksw group ls | add | add-ctx | rm``."""
    if not args.group_command or args.group_command == "ls":
        if not config.groups:
            console.print(
                f"[{DIM_GREY}]No groups configured. Use: ksw group add <name> <pattern>[/{DIM_GREY}]"
            )
            return
        for name in sorted(config.groups):
            members = config.groups[name]
            console.print(f"  [bold]{escape(name)}[/bold] [{DIM_GREY}]({len(members)})[/{DIM_GREY}]")
            for member in members:
                console.print(f"    {DOT} {escape(member)}")
        return

    if args.group_command == "add":
        pattern = args.pattern.lower()
        members = [c for c in kube.list_contexts() if pattern in c.lower()]
        if not members:
            raise KswitchError(f"No contexts match '{args.pattern}'")
        config.groups[args.name] = members
        manager.save(config)
        console.print(f"{OK} Group '{escape(args.name)}' created ({len(members)} contexts)")
        for member in members:
            console.print(f"    {DOT} {escape(member)}")
        return

    if args.group_command == "add-ctx":
        context = resolve_context(args.context, kube.list_contexts())
        if not config.add_to_group(args.name, context):
            console.print(f"{DOT} Already in group '{escape(args.name)}': {escape(context)}")
            return
        manager.save(config)
        console.print(f"{OK} Added {escape(context)} to group '{escape(args.name)}'")
        return

    if args.group_command == "rm":
        removed = False
        for name in args.names:
            if config.groups.pop(name, None) is None:
                console.print(f"{FAIL} Group '{escape(name)}' not found")
                continue
            removed = True
            console.print(f"{OK} Group '{escape(name)}' removed")
        if removed:
            manager.save(config)


def _handle_history_command(
    args: argparse.Namespace,
    manager: ConfigManager,
    config: KswConfig,
    kube: KubectlClient,
    console: Console,
) -> None:
    """Handle ``ksw history [N]``."""
    if args.entry is not None:
        if not 1 <= args.entry <= len(config.history):
            raise KswitchError(f"No history entry {args.entry}.")
        target = config.history[args.entry - 1]
        _commit_switch(target, kube.current_context(), manager, config, kube, console)
        return

    if not config.history:
        console.print(f"[{DIM_GREY}]No history yet.[/{DIM_GREY}]")
        return

    current = kube.current_context()
    console.print(f"[{DIM_GREY}]  Recent contexts:[/{DIM_GREY}]")
    for i, context in enumerate(config.history, start=1):
        alias = _first_alias_tag(config, context)
        if context == current:
            console.print(
                f"  {i}  [bold {SUCCESS}]{escape(context)}[/bold {SUCCESS}]{alias} "
                f"[{SUCCESS}]{ACTIVE_DOT}[/{SUCCESS}]"
            )
        else:
            console.print(f"  {i}  {escape(context)}{alias}")


def _handle_rename_command(
    args: argparse.Namespace,
    manager: ConfigManager,
    config: KswConfig,
    kube: KubectlClient,
    console: Console,
) -> None:
    """Handle ``ksw rename <old> <new>``."""
    old = resolve_context(args.old, kube.list_contexts())
    kube.rename_context(old, args.new)
    config.rename_context(old, args.new)
    _save_quietly(manager, config, console)
    console.print(
        f"{OK} Renamed [{DIM_GREY}]{escape(old)}[/{DIM_GREY}] {ARROW} "
        f"[bold {SUCCESS}]{escape(args.new)}[/bold {SUCCESS}]"
    )


def _handle_config_command(
    args: argparse.Namespace, manager: ConfigManager, config: KswConfig, console: Console
) -> None:
    """Handle config subcommands."""
    if args.config_command == "path":
        console.print(str(manager.config_path), markup=False, highlight=False, soft_wrap=True)
        return

    table = Table(title="Current Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("aliases", str(len(config.aliases)))
    table.add_row("pins", str(len(config.pins)))
    table.add_row("groups", ", ".join(sorted(config.groups)) or "[dim]none[/dim]")
    table.add_row("history", str(len(config.history)))
    table.add_row("short_names", "yes" if config.short_names else "no")

    console.print()
    console.print(table)
    console.print()
    console.print(f"[dim]Config file: {escape(str(manager.config_path))}[/dim]")


if __name__ == "__main__":
    main()
