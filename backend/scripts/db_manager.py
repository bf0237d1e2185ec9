"""Database management utility script.

Usage:
    python scripts/db_manager.py init      # Create missing tables
    python scripts/db_manager.py inspect   # Show tables, columns and row counts
    python scripts/db_manager.py reset     # Drop and recreate all tables
"""
import sys
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from lookin.config import get_settings
from lookin.database import engine
from lookin.db_init import init_database, drop_database, existing_tables
from lookin.logging_config import configure_logging


def create_tables():
    """Create any missing tables."""
    print(f"Database: {get_settings().DATABASE_URL}")
    created = init_database()
    if created:
        print(f"✓ Created: {', '.join(created)}")
    else:
        print("✓ Schema already up to date")


def inspect_database():
    """Inspect and display database schema information."""
    tables = existing_tables()
    print(f"Database: {get_settings().DATABASE_URL}")
    print("=" * 80)

    if not tables:
        print("No tables found in database.")
        print("Run 'python scripts/db_manager.py init' to create them.")
        return

    inspector = inspect(engine)
    with engine.connect() as conn:
        for table_name in sorted(tables):
            print(f"\nTable: {table_name}")
            print("-" * 80)
            print(f"{'Column':<25} {'Type':<20} {'Nullable':<10} {'PK'}")
            for col in inspector.get_columns(table_name):
                pk = col.get("primary_key", False)
                print(f"{col['name']:<25} {str(col['type']):<20} {str(col['nullable']):<10} {bool(pk)}")

            count = conn.execute(text(f"SELECT COUNT(*) FROM {table_name}")).scalar()
            print(f"\nRows: {count}")

            fks = inspector.get_foreign_keys(table_name)
            if fks:
                print("Foreign Keys:")
                for fk in fks:
                    print(f"  → {fk['referred_table']}.{', '.join(fk['referred_columns'])} "
                          f"(on {', '.join(fk['constrained_columns'])})")

            for idx in inspector.get_indexes(table_name):
                print(f"  • index {idx['name']} ({', '.join(idx['column_names'])})")

    print("\n" + "=" * 80)
    print("✓ Inspection complete")


def reset_database():
    """Drop all tables and recreate them."""
    print("WARNING: This will delete ALL data in the database!")
    response = input("Type 'yes' to continue: ")

    if response.lower() != 'yes':
        print("Reset cancelled.")
        return

    drop_database()
    init_database()
    print("✓ Database reset completed!")


def main():
    """Main entry point for the database manager."""
    parser = argparse.ArgumentParser(
        description="Database management utility for LOOK.IN",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/db_manager.py init      # Create missing tables
  python scripts/db_manager.py inspect   # Inspect database schema
  python scripts/db_manager.py reset     # Reset database (with confirmation)
        """
    )

    parser.add_argument(
        'action',
        choices=['init', 'inspect', 'reset'],
        help='Action to perform on the database'
    )

    args = parser.parse_args()
    configure_logging()

    try:
        if args.action == 'init':
            create_tables()
        elif args.action == 'inspect':
            inspect_database()
        elif args.action == 'reset':
            reset_database()
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.")
        sys.exit(1)
    except SQLAlchemyError as e:
        print(f"\n✗ Database error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
