"""
API Key Management Script
Generate and list API keys for reading website analytics
"""
import sys

from analytics_api.database import SessionLocal
from analytics_api.services.auth_service import create_api_key, get_or_create_user, list_api_keys


def print_api_keys(db):
    """List all API keys (the secrets themselves are never stored)"""
    print("\n" + "="*60)
    print("  CURRENT API KEYS")
    print("="*60)

    rows = list_api_keys(db)
    if not rows:
        print("No API keys found.")
    else:
        for api_key, user in rows:
            print(f"\nUser:    {user.username} ({user.role})")
            print(f"Name:    {api_key.name or '-'}")
            print(f"Created: {api_key.created_at}")

    print("\n" + "="*60)
    print()


def generate_new_key(db, username: str, name: str = None) -> str:
    """Generate a new API key for ``username``, creating the user if needed"""
    user = get_or_create_user(db, username)
    api_key = create_api_key(db, user, name)

    print("\n" + "="*60)
    print("  NEW API KEY GENERATED")
    print("="*60)
    print(f"\nUser:    {user.username}")
    print(f"API Key: {api_key}")
    print("\n⚠️  IMPORTANT: Save this key securely!")
    print("You won't be able to see it again.")
    print("\nUse it in requests to the dashboard API:")
    print(f'headers = {{"X-API-Key": "{api_key}"}}')
    print("\n" + "="*60)
    print()

    return api_key


def main(argv=None):
    """Main function"""
    argv = sys.argv if argv is None else argv

    if len(argv) < 2:
        print("\n📋 API Key Management")
        print("\nUsage:")
        print("  python manage_api_keys.py list                       - List all API keys")
        print("  python manage_api_keys.py generate <username> [name] - Generate new API key")
        print("\nExamples:")
        print("  python manage_api_keys.py list")
        print("  python manage_api_keys.py generate alice 'Dashboard'")
        print()
        return 1

    command = argv[1].lower()

    db = SessionLocal()
    try:
        if command == "list":
            print_api_keys(db)

        elif command == "generate":
            if len(argv) < 3:
                print("❌ Error: Please provide a username")
                print("Usage: python manage_api_keys.py generate <username> [name]")
                return 1

            name = " ".join(argv[3:]) or None
            generate_new_key(db, argv[2], name)

        else:
            print(f"❌ Unknown command: {command}")
            print("Use 'list' or 'generate'")
            return 1
    finally:
        db.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
