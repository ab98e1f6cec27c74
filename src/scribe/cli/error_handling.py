"""CLI error handling helpers.

Exit codes follow the HTTP status a web front end would return:
400 -> 2, 422 -> 3, 409 -> 4, 500 -> 1.
"""

import click

from scribe.domain.errors import (
    BusinessRuleError,
    ConflictError,
    DomainError,
    InfrastructureError,
    SerializationConflictError,
)

EXIT_INFRASTRUCTURE = 1
EXIT_BAD_REQUEST = 2
EXIT_REJECTED = 3
EXIT_CONFLICT = 4


def exit_code_for(error: Exception) -> int:
    """Return the process exit code for a workflow error."""
    if isinstance(error, SerializationConflictError):
        return EXIT_CONFLICT
    if isinstance(error, (BusinessRuleError, ConflictError)):
        return EXIT_REJECTED
    if isinstance(error, DomainError):
        return EXIT_BAD_REQUEST
    return EXIT_INFRASTRUCTURE


def handle_domain_error(ctx: click.Context, error: DomainError | InfrastructureError) -> None:
    """Render a workflow error and exit with its exit code."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, InfrastructureError) and error.retryable:
        click.echo("The operation had no effect and can be retried.", err=True)
    ctx.exit(exit_code_for(error))
