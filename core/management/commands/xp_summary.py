"""Print a profile summary for an account from the command line."""

from __future__ import annotations

import os

from django.core.management.base import BaseCommand, CommandError

from analysis.aggregations import PassRule
from analysis.formatting import completed_projects_text, format_count, format_xp
from core.auth_client import sign_in
from core.errors import DashboardError
from core.http import ApiEndpoints
from core.services import configured_pass_rule, load_profile_summary
from core.token_store import TokenStore

PASSWORD_ENV = "XPDASH_PASSWORD"


class Command(BaseCommand):
    """Sign in, fetch the profile, and print the dashboard statistics.

    The token is kept in memory for the duration of the command only.
    """

    help = "Sign in to the profile API and print XP and project statistics."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("--username", required=True, help="Login name or email.")
        parser.add_argument(
            "--password",
            default=None,
            help=f"Account password (defaults to the {PASSWORD_ENV} environment variable).",
        )
        parser.add_argument(
            "--top",
            type=int,
            default=5,
            help="Number of top projects by XP to list (default: 5).",
        )
        parser.add_argument(
            "--pass-rule",
            choices=[rule.value for rule in PassRule],
            default=None,
            help="Override the XPDASH_PASS_RULE setting.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        username: str = options["username"]
        password: str | None = options["password"] or os.getenv(PASSWORD_ENV)
        top: int = options["top"]
        if not password:
            raise CommandError(f"Pass --password or set {PASSWORD_ENV}.")
        if top < 0:
            raise CommandError("--top must be zero or greater.")

        rule = PassRule.parse(options["pass_rule"]) if options["pass_rule"] else configured_pass_rule()
        endpoints = ApiEndpoints.from_settings()
        store = TokenStore({})
        try:
            token = sign_in(username, password, store=store, endpoints=endpoints)
            summary = load_profile_summary(token, endpoints=endpoints, rule=rule)
        except DashboardError as exc:
            raise CommandError(exc.message) from exc
        finally:
            store.clear()

        self.stdout.write(f"User: {summary.login}")
        self.stdout.write(f"Total XP: {format_xp(summary.total_xp)}")
        self.stdout.write(
            f"Projects: {format_count(summary.pass_fail.pass_count)} passed, "
            f"{format_count(summary.pass_fail.fail_count)} failed ({rule.value})"
        )
        self.stdout.write(completed_projects_text(summary.completed_projects))
        for entry in summary.project_totals[:top]:
            self.stdout.write(f"  {entry.project_name}: {format_xp(entry.total_xp)}")
        return None
