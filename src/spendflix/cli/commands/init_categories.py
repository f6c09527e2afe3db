"""Initialize default categories and global rules."""

import click

from spendflix.domain.categorizer import INCOME_CATEGORY_NAME
from spendflix.domain.category import CategoryService
from spendflix.domain.errors import DomainError


# (name, color, parent)
INITIAL_CATEGORIES = [
    ("Food & Dining", "indigo-200", None),
    ("Kids", "yellow-300", None),
    ("Housing", "green-100", None),
    ("Transportation", "purple-200", None),
    ("Leisure", "green-300", None),
    ("Shopping", "orange-200", None),
    ("Services", "pink-200", None),
    ("Health", "blue-100", None),
    ("Travel", "amber-700", None),
    ("Investments", "gray-800", None),
    ("Other", "gray-200", None),
    (INCOME_CATEGORY_NAME, "green-900", None),
    ("Groceries", "indigo-200", "Food & Dining"),
    ("Restaurants", "indigo-200", "Food & Dining"),
    ("Fuel", "purple-200", "Transportation"),
    ("Ride Sharing", "purple-200", "Transportation"),
    ("Utilities", "green-100", "Housing"),
    ("Pharmacy", "blue-100", "Health"),
    ("Streaming", "green-300", "Leisure"),
]

# Keywords shared by every account, by category name
INITIAL_RULES = {
    "Groceries": ["supermercado", "mercado", "carrefour", "pao de acucar", "hortifruti"],
    "Restaurants": ["ifood", "restaurante", "padaria", "burger king", "mcdonalds"],
    "Fuel": ["posto", "shell", "ipiranga"],
    "Ride Sharing": ["uber", "99app"],
    "Utilities": ["enel", "sabesp", "vivo", "claro"],
    "Pharmacy": ["drogasil", "drogaria", "farmacia"],
    "Streaming": ["netflix", "spotify", "disney plus"],
    "Travel": ["latam", "gol linhas", "airbnb", "booking"],
    "Shopping": ["amazon", "mercadolivre", "magalu"],
    INCOME_CATEGORY_NAME: ["salario", "pix recebido", "transferencia recebida"],
}


@click.command("init-categories")
@click.option("--force", is_flag=True, help="Add missing defaults even if categories exist")
@click.pass_context
def init_categories(ctx, force: bool):
    """Initialize database with default categories and global rules."""
    service = CategoryService(ctx.obj["db"])

    # Check if categories already exist
    if service.list_categories() and not force:
        click.echo("Categories already exist. Use --force to add missing defaults.")
        return

    click.echo("Creating default categories...")

    created = 0
    rules = 0
    errors = 0

    # Parents are listed before their children
    for name, color, parent in INITIAL_CATEGORIES:
        if service.get_category_by_name(name) is not None:
            continue
        try:
            service.create_category(name=name, color=color, parent_path=parent)
            created += 1
        except DomainError as e:
            click.echo(f"Warning: Could not create category '{name}': {e}", err=True)
            errors += 1

    for category_name, keywords in INITIAL_RULES.items():
        category = service.get_category_by_name(category_name)
        if category is None:
            click.echo(f"Warning: Skipping rules for missing category '{category_name}'", err=True)
            errors += 1
            continue
        for keyword in keywords:
            service.add_global_rule(keyword, category.id)
            rules += 1

    if errors == 0:
        click.echo(f"Successfully created {created} categories and {rules} rules.")
    else:
        click.echo(f"Created {created} categories and {rules} rules with {errors} errors.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
