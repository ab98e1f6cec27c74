"""Class and enrollment commands."""

import click
from scribe.cli.error_handling import handle_domain_error
from scribe.database.sqlalchemy_db import SQLAlchemyClassStore
from scribe.domain.enrollment import EnrollmentWorkflow
from scribe.domain.entities import Class
from scribe.domain.errors import DomainError, InfrastructureError
from scribe.utils.request_loader import load_enrollment_request


def _workflow(ctx) -> EnrollmentWorkflow:
    return EnrollmentWorkflow(ctx.obj["db"], SQLAlchemyClassStore())


def _echo_class(klass: Class) -> None:
    course = klass.course
    click.echo(f"{course.code}: {course.title}")
    click.echo(f"Enrolled: {len(klass.students)}/{course.capacity}")
    if not klass.students:
        click.echo("No students enrolled.")
        return

    click.echo("-" * 60)
    for student in klass.students:
        birthdate = student.birthdate.isoformat() if student.birthdate else "-"
        click.echo(f"ID: {student.id:3d} | {student.name:20s} | {birthdate:10s} | {student.email}")


@click.group()
def class_group():
    """Inspect classes."""
    pass


@class_group.command("show")
@click.argument("course_code", metavar="COURSE_CODE")
@click.pass_context
def show_class(ctx, course_code: str):
    """Show a course and its enrolled students.

    Examples:
        scribe class show SICP
    """
    try:
        klass = _workflow(ctx).get_class(course_code)
    except (DomainError, InfrastructureError) as e:
        handle_domain_error(ctx, e)
    _echo_class(klass)


@click.command("enroll")
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def enroll(ctx, request_file: str):
    """Enroll students in a course from a JSON file.

    All students must be registered, none may already be enrolled, and the
    course must have room for all of them; otherwise nobody is enrolled.

    Examples:
        scribe enroll enrollment.json
    """
    try:
        request = load_enrollment_request(request_file)
        klass = _workflow(ctx).enroll(request)
    except (DomainError, InfrastructureError) as e:
        handle_domain_error(ctx, e)

    count = len(set(request.emails))
    click.echo(f"Enrolled {count} student{'s' if count != 1 else ''} in {klass.code}")
    _echo_class(klass)


def register_commands(cli):
    """Register class and enrollment commands with main CLI."""
    cli.add_command(class_group, name="class")
    cli.add_command(enroll)
