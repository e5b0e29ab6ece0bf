"""Libellus command line control tool."""
import click

from libellus import __version__
from libellus.data import serialize_json
from libellus.element import definition_for, palette

from . import bridge_command


@click.group(invoke_without_command=True)
@click.option('--api-url', envvar='LIBELLUS_API_URL', default=None,
              help='Base URL of the form storage API')
@click.option('--token', envvar='LIBELLUS_API_TOKEN', default=None,
              help='Bearer token used for admin requests')
@click.version_option(version=__version__)
@click.pass_context
def libellus_manager(ctx, api_url, token):
    """Libellus command line control tool."""
    ctx.ensure_object(dict)
    ctx.obj.setdefault('api_url', api_url)
    ctx.obj.setdefault('token', token)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@libellus_manager.command("elements")
def list_elements():
    """List the element types of the palette."""
    for entry in palette():
        click.echo(f"{entry['key']:<12} {entry['title']:<14} {entry['icon'] or '-'}")


@libellus_manager.group("forms")
def form_commands():
    """Manage stored form definitions."""


@form_commands.command("list")
@bridge_command
async def list_forms(bridge):
    """List stored forms."""
    forms = await bridge.forms.list()
    if not forms:
        click.echo("No forms found.")
        return

    for form in forms:
        status = "published" if form.published else "draft"
        click.echo(f"{form.id}  [{status}]  {form.name} ({len(form.elements)} elements)")


@form_commands.command("show")
@click.argument('form_id')
@click.option('--json', 'as_json', is_flag=True, help='Print the raw form definition')
@bridge_command
async def show_form(bridge, form_id, as_json):
    """Show one form and its elements."""
    form = await bridge.load(form_id)
    if as_json:
        click.echo(serialize_json(form, indent=2))
        return

    click.echo(f"{form.name} [{form.id}] {'published' if form.published else 'draft'}")
    if form.description:
        click.echo(form.description)

    for index, element in enumerate(form.elements, 1):
        definition = definition_for(element.type)
        required = definition is not None and definition.is_required(element.attributes)
        marker = " *" if required else ""
        click.echo(f"  {index}. {element.label}{marker} <{element.type}> {element.id}")


@form_commands.command("publish")
@click.argument('form_id')
@bridge_command
async def toggle_form_status(bridge, form_id):
    """Toggle the publish status of a form."""
    resp = await bridge.toggle_status(form_id)
    click.echo(resp.message or f"Form status updated: {form_id}")


@form_commands.command("delete")
@click.argument('form_id')
@click.confirmation_option(prompt='Delete this form and its submissions?')
@bridge_command
async def delete_form(bridge, form_id):
    """Delete a form."""
    resp = await bridge.delete(form_id)
    click.echo(resp.message or f"Form deleted: {form_id}")


@libellus_manager.group("submissions")
def submission_commands():
    """Browse stored submissions."""


@submission_commands.command("list")
@click.argument('form_id')
@bridge_command
async def list_submissions(bridge, form_id):
    """List the submissions of a form."""
    records = await bridge.submissions.list(form_id)
    if not records:
        click.echo("No submissions found.")
        return

    for record in records:
        click.echo(f"{record.id}  {record.created_at.isoformat()}  {serialize_json(record.data)}")
