# gofinances/cli.py
import logging
import os
import sqlite3
from datetime import date

import click
from dotenv import load_dotenv

from gofinances.auth import AuthError, build_authorization_url, load_user, sign_in, sign_out
from gofinances.config import catalog_from_config, load_config, settings_from_config
from gofinances.core.models import NEGATIVE, POSITIVE
from gofinances.months import MonthCursor
from gofinances.registration import RegistrationError, register_transaction
from gofinances.reporters import build_dashboard, build_summary
from gofinances.storage import KeyValueStore, clear_transactions, load_transactions, transactions_key


class AppContext:
    def __init__(self, cfg):
        self.cfg = cfg
        self.store = KeyValueStore(cfg['db_path'])
        self.namespace = cfg['namespace']
        self.catalog = catalog_from_config(cfg)
        self.settings = settings_from_config(cfg)

    def require_user(self):
        user = load_user(self.store, self.namespace)
        if user is None:
            raise click.ClickException("Not signed in. Run 'gofinances login TOKEN' first.")
        return user

    def user_transactions_key(self):
        return transactions_key(self.namespace, self.require_user().id)


pass_app = click.make_pass_decorator(AppContext)


@click.group()
@click.option(
    '--config', 'config_path',
    default='config.yaml',
    type=click.Path(dir_okay=False),
    help='Path to config.yaml (defaults are used when it does not exist)'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file providing CLIENT_ID and REDIRECT_URI'
)
@click.option(
    '--db', 'db_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='SQLite storage file (overrides config)'
)
@click.pass_context
def main(ctx, config_path, env_file, db_path):
    """
    Track income and expenses locally: register transactions, then view the
    dashboard highlights or the per-category summary for a month.
    """
    if env_file:
        load_dotenv(env_file)
    logging.basicConfig(level=os.getenv("GOFINANCES_LOG_LEVEL", "WARNING").upper())

    try:
        cfg = load_config(config_path)
        if db_path:
            cfg['db_path'] = db_path
        ctx.obj = AppContext(cfg)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}")


@main.command('auth-url')
@pass_app
def auth_url(app):
    """Print the Google sign-in URL."""
    google = app.cfg['google']
    try:
        click.echo(build_authorization_url(google['client_id'], google['redirect_uri']))
    except AuthError as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument('access_token')
@pass_app
def login(app, access_token):
    """Sign in with an OAuth access token."""
    try:
        user = sign_in(app.store, app.namespace, access_token)
    except AuthError as e:
        raise click.ClickException(str(e))
    click.echo(f"Signed in as {user.name} <{user.email}>.")


@main.command()
@pass_app
def logout(app):
    """Sign out the current user."""
    sign_out(app.store, app.namespace)
    click.echo("Signed out.")


@main.command()
@pass_app
def whoami(app):
    """Show the signed-in user."""
    user = app.require_user()
    click.echo(f"{user.name} <{user.email}> ({user.id})")


@main.command()
@pass_app
def categories(app):
    """List the category catalog in report order."""
    for cat in app.catalog:
        click.echo(f"{cat.key:<12} {cat.name:<16} {cat.color}  {cat.icon}")


@main.command()
@click.option('--name', required=True, help='Transaction label')
@click.option('--amount', required=True, help='Positive amount, e.g. 12.50')
@click.option(
    '--type', 'tx_type',
    required=True,
    type=click.Choice([POSITIVE, NEGATIVE]),
    help='positive (income) or negative (expense)'
)
@click.option('--category', required=True, help='Category key from the catalog')
@pass_app
def register(app, name, amount, tx_type, category):
    """Register a new transaction."""
    key = app.user_transactions_key()
    try:
        tx = register_transaction(
            app.store, key,
            name=name, amount=amount, type=tx_type, category=category,
            catalog=app.catalog,
        )
    except RegistrationError as e:
        for field, msg in e.errors.items():
            click.echo(f"  {field}: {msg}", err=True)
        raise click.ClickException("Transaction not registered.")
    except sqlite3.Error as e:
        raise click.ClickException(f"Could not save the transaction: {e}")
    click.echo(f"Registered {tx.name} ({tx.id}).")


@main.command()
@pass_app
def dashboard(app):
    """Show entries, expenses, total and the transaction listing."""
    user = app.require_user()
    txs = load_transactions(app.store, transactions_key(app.namespace, user.id))
    report = build_dashboard(txs, app.catalog, app.settings)

    click.echo(f"Olá, {user.name}" if app.settings.locale == 'pt_BR' else f"Hello, {user.name}")
    for card in report.highlights:
        click.echo(f"{card.title:<10} {card.amount:>16}  {card.last_transaction}")
    if report.transactions:
        click.echo("")
    for row in report.transactions:
        amount = f"-{row.amount}" if row.type == NEGATIVE else row.amount
        click.echo(f"{row.date}  {row.name:<24} {amount:>15}  {row.category}")


@main.command()
@click.option('--month', default=None, help='Month to summarize as YYYY-MM (default: current month)')
@pass_app
def summary(app, month):
    """Show each category's share of a month's expenses."""
    try:
        cursor = MonthCursor.parse(month) if month else MonthCursor.from_date(date.today())
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--month')
    txs = load_transactions(app.store, app.user_transactions_key())
    report = build_summary(txs, cursor, app.catalog, app.settings)

    click.echo(report.month_label)
    if report.is_empty:
        click.echo("No expenses in this month.")
        return
    for item in report.categories:
        click.echo(f"{item.percent:>5}  {item.name:<16} {item.formatted_total:>16}")


@main.command()
@click.option('--yes', is_flag=True, default=False, help='Confirm removal of all transactions')
@pass_app
def clear(app, yes):
    """Remove every stored transaction of the signed-in user."""
    if not yes:
        raise click.ClickException("Refusing to clear transactions without --yes.")
    clear_transactions(app.store, app.user_transactions_key())
    click.echo("All transactions removed.")
