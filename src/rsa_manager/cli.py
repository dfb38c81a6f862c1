from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import click

from . import __version__, console
from .core.errors import RsaManagerError, ValidationError
from .core.inventory import list_key_pairs
from .core.keygen import DEFAULT_TIMEOUT, KeyGenerator, SshKeygen
from .core.keystore import KeyStore
from .core.store import HostConfigFile
from .core.util import DEFAULT_KEY_SIZE, parse_key_size, require, validate_host_id

MENU = """=========================================
    RSA Manager - Main Menu
=========================================
1. Create a new RSA key pair
2. Delete an RSA key pair
3. List existing keys
4. Help
5. Quit
========================================="""


@dataclass
class Environment:
    ssh_dir: Path
    config: HostConfigFile
    keys: KeyStore
    generator: KeyGenerator


def make_environment(ssh_dir: Path, keygen_timeout: float = DEFAULT_TIMEOUT) -> Environment:
    ssh_dir = ssh_dir.expanduser().absolute()
    keys = KeyStore(ssh_dir)
    return Environment(
        ssh_dir=ssh_dir,
        config=HostConfigFile(ssh_dir / "config"),
        keys=keys,
        generator=SshKeygen(keys, timeout=keygen_timeout),
    )


def ensure_layout(env: Environment) -> None:
    if env.keys.ensure_exists():
        console.success(f"SSH directory created: {env.ssh_dir}")
    if env.config.ensure_exists():
        console.success(f"Config file created: {env.config.path}")


pass_env = click.make_pass_decorator(Environment)


class AliasedGroup(click.Group):
    """Group accepting single-letter aliases; unknown commands and options print the full help."""

    aliases = {"c": "create", "d": "delete", "l": "list", "h": "help", "t": "tui"}

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def _unknown(self, ctx: click.Context, name: str) -> None:
        console.error(f"Unknown option: {name}")
        click.echo(ctx.get_help())
        ctx.exit(1)

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.NoSuchOption as exc:
            if ctx.resilient_parsing:
                raise
            self._unknown(ctx, exc.option_name)
            raise

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if not ctx.resilient_parsing and self.get_command(ctx, args[0]) is None:
            self._unknown(ctx, args[0])
        _, cmd, rest = super().resolve_command(ctx, args)
        return cmd.name, cmd, rest


@click.group(cls=AliasedGroup, invoke_without_command=True)
@click.version_option(__version__)
@click.option(
    "--ssh-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="RSA_MANAGER_SSH_DIR",
    help="Directory holding the keys and the ssh config [default: ~/.ssh]",
)
@click.option(
    "--keygen-timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    envvar="RSA_MANAGER_KEYGEN_TIMEOUT",
    show_default=True,
    help="Seconds to wait for ssh-keygen",
)
@click.pass_context
def main(ctx: click.Context, ssh_dir: Optional[Path], keygen_timeout: float) -> None:
    """rsa-manager: manage RSA key pairs and the matching ~/.ssh/config entries.

    Run without a command for the interactive menu.
    """
    env = make_environment(ssh_dir or Path.home() / ".ssh", keygen_timeout)
    try:
        ensure_layout(env)
    except RsaManagerError as exc:
        console.error(str(exc))
        raise SystemExit(1)
    ctx.obj = env
    if ctx.invoked_subcommand is None:
        interactive_menu(ctx, env)


def _ask(text: str) -> str:
    return click.prompt(text, default="", show_default=False)


def create_key(env: Environment) -> None:
    click.echo()
    console.info("=== CREATE A NEW RSA KEY PAIR ===")
    server_id = _ask("Server name (ID)")
    hostname = _ask("Server hostname/IP")
    username = _ask("Username")
    key_size = _ask(f"RSA key size [{DEFAULT_KEY_SIZE}]")

    host_id = validate_host_id(server_id)
    hostname = require(hostname, "hostname")
    username = require(username, "username")
    bits = parse_key_size(key_size)

    priv = env.keys.private_key_path(host_id)
    if env.keys.exists(host_id):
        console.warning(f"Key {priv.name} already exists!")
        if not click.confirm("Do you want to replace it?", default=False):
            console.info("Operation cancelled.")
            return
        env.keys.delete(host_id)

    console.info(f"Generating RSA key pair ({bits} bits)...")
    paths = env.generator.generate(host_id, bits, f"{username}@{hostname}")
    console.success(f"Key pair generated: {paths.private_key_path}")

    if env.config.has_block(host_id):
        console.info(f"Replacing previous configuration for {host_id}...")
    env.config.upsert_block(host_id, hostname, username, str(paths.private_key_path))
    console.success(f"SSH configuration added for {host_id}")

    click.echo()
    console.info("Generated public key:")
    click.echo(env.keys.read_public_key(host_id))
    click.echo()
    console.info("You can now copy this key to the server with:")
    console.info(f"ssh-copy-id -i {paths.public_key_path} {username}@{hostname}")
    click.echo()
    console.success(f"Setup complete! Connect with: ssh {host_id}")


def delete_key(env: Environment) -> None:
    click.echo()
    console.info("=== DELETE AN RSA KEY PAIR ===")
    click.echo("Available keys:")
    for host_id in env.keys.list_ids():
        click.echo(host_id)
    click.echo()

    host_id = validate_host_id(_ask("Server name to delete"))
    priv = env.keys.private_key_path(host_id)
    if not env.keys.exists(host_id):
        raise ValidationError(f"Key {priv.name} does not exist!")

    console.warning("You are about to delete:")
    click.echo(f"  - Private key: {priv}")
    click.echo(f"  - Public key: {env.keys.public_key_path(host_id)}")
    click.echo(f"  - SSH configuration for {host_id}")
    click.echo()
    if not click.confirm("Are you sure?", default=False):
        console.info("Deletion cancelled.")
        return

    env.keys.delete(host_id)
    env.config.remove_block(host_id)
    console.success(f"Key pair and configuration deleted for {host_id}")


def list_keys(env: Environment) -> None:
    click.echo()
    console.info("=== AVAILABLE RSA KEYS ===")
    records = list_key_pairs(env.keys, env.config)
    if not records:
        console.warning(f"No RSA keys found in {env.keys.directory}")
        return
    rows = [
        (r.id, str(r.private_key_path), "Yes" if r.has_matching_config else "No")
        for r in records
    ]
    click.echo(console.format_table(("Server", "Key path", "Configuration"), rows))


def run_action(action: Callable[[Environment], None], env: Environment) -> bool:
    """Run one menu action, reporting failures instead of raising them."""
    try:
        action(env)
    except RsaManagerError as exc:
        console.error(str(exc))
        return False
    return True


def interactive_menu(ctx: click.Context, env: Environment) -> None:
    actions = {"1": create_key, "2": delete_key, "3": list_keys}
    while True:
        click.echo()
        click.echo(MENU)
        choice = _ask("Choose an option (1-5)").strip()
        if choice == "5":
            console.info("Goodbye!")
            ctx.exit(0)
        elif choice == "4":
            click.echo(ctx.get_help())
        elif choice in actions:
            run_action(actions[choice], env)
        else:
            console.error("Invalid option!")
        click.echo()
        click.pause()


@main.command()
@pass_env
def create(env: Environment) -> None:
    """Create a new RSA key pair and its Host entry (alias: c)."""
    if not run_action(create_key, env):
        raise SystemExit(1)


@main.command()
@pass_env
def delete(env: Environment) -> None:
    """Delete an RSA key pair and its Host entry (alias: d)."""
    if not run_action(delete_key, env):
        raise SystemExit(1)


@main.command("list")
@pass_env
def list_cmd(env: Environment) -> None:
    """List existing keys and whether they are configured (alias: l)."""
    if not run_action(list_keys, env):
        raise SystemExit(1)


@main.command("help")
@click.pass_context
def help_cmd(ctx: click.Context) -> None:
    """Show this help (alias: h)."""
    click.echo(ctx.parent.get_help())


@main.command()
@pass_env
def tui(env: Environment) -> None:  # pragma: no cover - UI launcher
    """Browse key pairs in a terminal UI (alias: t)."""
    try:
        from .tui.app import KeyInventoryApp
    except ImportError as exc:
        raise SystemExit(f"TUI not available: {exc}")
    KeyInventoryApp(env.keys, env.config).run()
