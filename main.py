import click
import uvicorn

from employee_console.core.logging import get_logger
from employee_console.core.config import settings
from employee_console.core.exceptions import ConsoleError

logger = get_logger(__name__)


@click.group()
def cli():
    """Employee console CLI"""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0")
@click.option("--port", default=8000)
@click.option("--workers", default=1)
@click.option("--production", is_flag=True, help="Run in production mode")
def serve(host, port, workers, production):
    """Start the API server"""
    reload = not production  # Auto-reload unless production mode

    uvicorn.run(
        "employee_console.api.web_app:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers if production else 1,
        log_level="info" if production else "debug",
    )


@cli.command()
@click.option("--email", required=True, help="Login email")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--full-name", default=None, help="Display name")
@click.option("--role", default="DATA_ENTRY", help="DATA_ENTRY, SALES, ADMIN or SUPERADMIN")
def create_employee(email, password, full_name, role):
    """Create a login and an employee profile"""
    from employee_console.db.base import SessionLocal
    from employee_console.services.auth_service import AuthService
    from employee_console.services.employee_service import EmployeeService, normalize_role

    db = SessionLocal()
    try:
        user = AuthService(db).sign_up(email, password, role=normalize_role(role), full_name=full_name)
        employee = EmployeeService(db).create_employee(email, full_name=full_name, role=role, user_id=user.id)
        click.echo(f"Created employee {employee.email} ({employee.role}), user id {user.id}")
    except ConsoleError as e:
        click.echo(f"Error: {e.message}")
        raise SystemExit(1)
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True)
@click.option("--password", prompt=True, hide_input=True)
def issue_token(email, password):
    """Sign in and print a bearer session token"""
    from employee_console.db.base import SessionLocal
    from employee_console.services.auth_service import AuthService

    db = SessionLocal()
    try:
        auth_service = AuthService(db)
        user = auth_service.authenticate(email, password)
        token, expires_at = auth_service.issue_session(user.id)
        click.echo(token)
        click.echo(f"Expires at {expires_at.isoformat()}", err=True)
    except ConsoleError as e:
        click.echo(f"Error: {e.message}")
        raise SystemExit(1)
    finally:
        db.close()


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--level", type=click.Choice(["head", "sub", "micro"]), required=True)
@click.option("--slug", default="category", help="Slug of the category the image belongs to")
@click.option("--token", envvar="CONSOLE_TOKEN", required=True, help="Bearer session token")
@click.option("--api-url", default=settings.CONSOLE_API_URL, help="Base URL of the console API")
def upload_category_image(path, level, slug, token, api_url):
    """Upload a category image through the API and print its public URL"""
    from employee_console.clients.image_upload_client import CategoryImageUploadClient

    client = CategoryImageUploadClient(api_url, token)
    try:
        public_url = client.upload_file(path, level, slug)
        click.echo(public_url)
    except ConsoleError as e:
        click.echo(f"Error: {e.message}")
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
