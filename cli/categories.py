#!/usr/bin/env python3

from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List imported categories as a tree."""
    categories = services.categories.find_all()

    if not categories:
        logger.info("No categories found.")
        return

    children = {}
    for category in categories:
        children.setdefault(category.parent_id, []).append(category)

    def show(parent_id, depth):
        for category in children.get(parent_id, []):
            logger.info(f"{'  ' * depth}{category.label} (ID: {category.id})")
            show(category.id, depth + 1)

    logger.info("\nCategories:")
    logger.info("=" * 80)
    show(None, 0)
    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_show(args, services):
    """Show one category by its full path."""
    category = services.categories.find_by_path(args.path)
    if not category:
        logger.error(f"Category '{args.path}' not found.")
        return

    logger.info(f"ID: {category.id}")
    logger.info(f"Path: {category.path}")
    if category.parent_id is not None:
        logger.info(f"Parent ID: {category.parent_id}")
    if category.color is not None:
        logger.info(f"Color: #{category.color:06x}")
    subcategories = services.categories.find_children(category.id)
    if subcategories:
        logger.info(f"Subcategories: {', '.join(c.label for c in subcategories)}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Inspect categories",
        description="List imported transaction categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    show_parser = categories_subparsers.add_parser(
        "show", help="Show a category by path"
    )
    show_parser.add_argument("path", help="Full category path, e.g. Food:Groceries")
    show_parser.set_defaults(func=cmd_show)
