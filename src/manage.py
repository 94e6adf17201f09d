"""Storefront management CLI.

Creates and drops the database schema and seeds the demo catalogue.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Insert demo products into an empty catalogue
"""

import argparse
import sys

DEMO_PRODUCTS = [
    ("Nike Air Max", 120.0, "Iconic cushioned runner with a visible Air unit."),
    ("Adidas Ultraboost", 180.0, "Responsive Boost midsole for long-distance comfort."),
    ("Puma RS-X", 110.0, "Chunky retro silhouette with bold colour blocking."),
    ("Reebok Classic", 80.0, "Soft leather upper on a timeless low-profile sole."),
    ("Vans Old Skool", 70.0, "Canvas and suede skate shoe with the side stripe."),
    ("Converse Chuck 70", 85.0, "Premium canvas high-top with vintage details."),
    ("New Balance 550", 130.0, "Basketball-inspired leather sneaker from 1989."),
    ("Jordan 1 Low", 150.0, "Low-cut take on the original 1985 court shoe."),
]


def _image_url(name: str) -> str:
    return f"https://placehold.co/400x300?text={name.replace(' ', '+')}"


def _storefront():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _storefront()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _storefront()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def seed_catalogue() -> int:
    """Add the demo products when the catalogue is empty. Returns how many were added."""
    from protean.utils.globals import current_domain

    from storefront.catalogue.management import AddProduct
    from storefront.catalogue.queries import list_products
    from storefront.settings.provider import email_settings, payment_settings

    # Seeds both settings singletons from the environment if absent
    payment_settings()
    email_settings()

    if list_products(include_archived=True):
        return 0

    for name, price, description in DEMO_PRODUCTS:
        current_domain.process(
            AddProduct(name=name, price=price, description=description, image_url=_image_url(name)),
            asynchronous=False,
        )
    return len(DEMO_PRODUCTS)


def seed():
    domain = _storefront()
    with domain.domain_context():
        added = seed_catalogue()
    if added:
        print(f"Seeded {added} demo products.")
    else:
        print("Catalogue already has products; nothing seeded.")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Insert demo products and settings")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
