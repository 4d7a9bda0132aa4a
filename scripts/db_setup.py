#!/usr/bin/env python
"""
db_setup.py

Script to create the PostgreSQL database and role for StudyBridge and bring
the schema up to date with Alembic.
It reads database credentials from a .env file located at the project root.

Required .env variables:
  DB_HOST
  DB_PORT
  DB_SUPERUSER
  DB_SUPERUSER_PASSWORD
  DB_USER
  DB_PASSWORD
  DB_NAME

Usage:
  python scripts/db_setup.py [--recreate]
"""
import argparse
import os
import sys
import time
from pathlib import Path

from dotenv import load_dotenv
import psycopg2
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT

PROJECT_ROOT = Path(__file__).resolve().parent.parent
BACKEND_DIR = PROJECT_ROOT / 'backend'

# Load environment variables from .env at project root
load_dotenv(PROJECT_ROOT / '.env')

DB_HOST = os.getenv('DB_HOST', '127.0.0.1')
DB_PORT = os.getenv('DB_PORT', '5432')
SUPERUSER = os.getenv('DB_SUPERUSER', 'postgres')
SUPERUSER_PASSWORD = os.getenv('DB_SUPERUSER_PASSWORD')
DB_USER = os.getenv('DB_USER')
DB_PASSWORD = os.getenv('DB_PASSWORD')
DB_NAME = os.getenv('DB_NAME', 'studybridge')


def grant_privileges(cur, db_name, db_user):
    """Grant the application role what it needs on the public schema."""
    privilege_commands = [
        f'GRANT ALL PRIVILEGES ON DATABASE "{db_name}" TO {db_user}',
        f"GRANT ALL ON SCHEMA public TO {db_user}",
        f"GRANT ALL PRIVILEGES ON ALL TABLES IN SCHEMA public TO {db_user}",
        f"GRANT ALL PRIVILEGES ON ALL SEQUENCES IN SCHEMA public TO {db_user}",
        f"ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT ALL PRIVILEGES ON TABLES TO {db_user}",
        f"ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT ALL PRIVILEGES ON SEQUENCES TO {db_user}",
    ]

    for command in privilege_commands:
        try:
            cur.execute(command)
            print(f"Executed: {command}")
        except psycopg2.Error as e:
            print(f"Warning while executing '{command}': {e}")


def setup_database(recreate=False):
    """Create the role and database, optionally dropping an existing database."""
    print(f"\nConnecting to PostgreSQL at {DB_HOST}:{DB_PORT} as {SUPERUSER}...")
    try:
        conn = psycopg2.connect(
            dbname='postgres',
            user=SUPERUSER,
            password=SUPERUSER_PASSWORD,
            host=DB_HOST,
            port=DB_PORT
        )
        conn.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
        cur = conn.cursor()

        try:
            cur.execute(f"CREATE USER {DB_USER} WITH PASSWORD %s;", (DB_PASSWORD,))
            print(f"User '{DB_USER}' created.")
        except psycopg2.errors.DuplicateObject:
            print(f"User '{DB_USER}' already exists.")

        if recreate:
            cur.execute("""
                SELECT pg_terminate_backend(pg_stat_activity.pid)
                FROM pg_stat_activity
                WHERE pg_stat_activity.datname = %s
                AND pid <> pg_backend_pid();
            """, (DB_NAME,))
            cur.execute(f'DROP DATABASE IF EXISTS "{DB_NAME}";')
            print(f"Dropped existing database '{DB_NAME}'.")

        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (DB_NAME,))
        if cur.fetchone():
            print(f"Database '{DB_NAME}' already exists.")
        else:
            cur.execute(f'CREATE DATABASE "{DB_NAME}" WITH OWNER = {DB_USER};')
            print(f"Database '{DB_NAME}' created.")
            # Give the new database a moment before reconnecting
            time.sleep(2)

        cur.close()
        conn.close()

        conn = psycopg2.connect(
            dbname=DB_NAME,
            user=SUPERUSER,
            password=SUPERUSER_PASSWORD,
            host=DB_HOST,
            port=DB_PORT
        )
        conn.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
        cur = conn.cursor()
        grant_privileges(cur, DB_NAME, DB_USER)
        cur.close()
        conn.close()
        return True

    except psycopg2.Error as e:
        print(f"Error in database setup: {e}")
        return False


def run_migrations():
    """Apply every Alembic migration up to head."""
    from alembic import command
    from alembic.config import Config

    # env.py imports the application settings, which expect the backend on the path
    sys.path.insert(0, str(BACKEND_DIR))
    os.chdir(BACKEND_DIR)

    alembic_cfg = Config(str(BACKEND_DIR / 'alembic.ini'))
    command.upgrade(alembic_cfg, 'head')
    print("Migrations applied.")


def main():
    parser = argparse.ArgumentParser(description="Create the StudyBridge database and apply migrations")
    parser.add_argument('--recreate', action='store_true', help="drop the database first if it exists")
    args = parser.parse_args()

    if not all([SUPERUSER_PASSWORD, DB_USER, DB_PASSWORD]):
        print("ERROR: Missing one of DB_SUPERUSER_PASSWORD, DB_USER, or DB_PASSWORD in .env")
        sys.exit(1)

    print("=== Setting up database and user ===")
    if not setup_database(recreate=args.recreate):
        print("\nFailed to setup database. Please check your PostgreSQL connection and credentials.")
        sys.exit(1)

    print("\n=== Applying migrations ===")
    run_migrations()
    print("\nDatabase setup completed successfully!")


if __name__ == '__main__':
    main()
