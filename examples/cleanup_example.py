#!/usr/bin/env python3
"""
Example: Analyzing a Gmail account for bulk mail cleanup
"""

import sys

from rich.console import Console

from mailcleanup import CleanupSession, DummyClient, GmailClient, load_config
from mailcleanup.report import render_action_record, render_profile, render_snapshot


def main():
    console = Console()

    config_result = load_config()
    if config_result.is_err():
        console.print(f"[red]{config_result.unwrap_err()}[/red]")
        sys.exit(1)
    config = config_result.unwrap()

    # Pass --offline to try things out without Gmail credentials
    if "--offline" in sys.argv:
        client = DummyClient(estimates={
            "category:promotions older_than:90d": 1830,
            "from:noreply OR from:no-reply older_than:90d": 412,
        })
    else:
        # You'll need to download credentials.json from Google Cloud Console
        client = GmailClient(config.credentials_path, token_path=config.token_path,
                             timeout=config.request_timeout, verbose=config.verbose)

    session = CleanupSession(client, config)

    render_profile(console, session.refresh_profile())

    session.select("promotions", "noreply")
    session.set_time_range(90)

    snapshot = session.run_analysis()
    render_snapshot(console, snapshot)

    if snapshot.actionable:
        console.print("\n[bold]Manual Cleanup Instructions[/bold]")
        for record in session.show_instructions():
            render_action_record(console, record)

    path = session.save_export(".")
    console.print(f"\nQueries exported to {path}")


if __name__ == "__main__":
    main()
