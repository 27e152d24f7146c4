"""Storefront management CLI.

Usage:
    python src/manage.py serve --port 8000   # Run the API with uvicorn
    python src/manage.py catalogue           # Print the starter catalogue
"""

import argparse
import os
import sys


def serve(host, port, reload):
    """Run the storefront API."""
    import uvicorn

    uvicorn.run("app:app", host=host, port=port, reload=reload, app_dir=os.path.dirname(os.path.abspath(__file__)))


def show_catalogue():
    """Seed an in-process catalogue and print it."""
    from protean.utils.globals import current_domain
    from storefront.catalogue.product import Product
    from storefront.catalogue.seeding import SeedCatalogue
    from storefront.domain import storefront

    storefront.init()
    with storefront.domain_context():
        current_domain.process(SeedCatalogue(requested_by="cli"), asynchronous=False)
        for product in current_domain.repository_for(Product).list_all():
            print(f"{product.id}  {product.name:<20} {product.unit_price():>8}  stock={product.stock}")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true")

    subparsers.add_parser("catalogue", help="Print the starter catalogue")

    args = parser.parse_args()

    if args.command == "serve":
        serve(args.host, args.port, args.reload)
    elif args.command == "catalogue":
        show_catalogue()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
