"""Account status display for the CLI"""

from rich.table import Table

from relay.endpoints.accounts import summarize_accounts
from relay.runtime import RelayConfig


def show_accounts(relay_config: RelayConfig, console):
    """
    Display remote accounts with their realm and credential availability

    Args:
        relay_config: Runtime configuration
        console: Rich console for output
    """
    summaries = summarize_accounts(relay_config)
    if not summaries:
        console.print("[yellow]No remote accounts configured (REMOTE_ACCOUNTS is empty)[/yellow]")
        return

    table = Table(title="Remote Accounts")
    table.add_column("Account", style="cyan")
    table.add_column("Description")
    table.add_column("Realm")
    table.add_column("Credential")

    for summary in summaries:
        has_credential = summary.realm is not None and summary.realm in relay_config.credentials
        table.add_row(
            summary.account,
            summary.description,
            summary.realm or "[red]invalid URL[/red]",
            "[green]✓[/green]" if has_credential else "[red]✗[/red]",
        )

    console.print(table)
