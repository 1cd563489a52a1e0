#!/usr/bin/env python3
"""
Quick check of the bot's configuration.
Run this before starting the bot to see which variables are set.
"""
from dotenv import load_dotenv
import os

load_dotenv()

REQUIRED = {
    "SLACK_BOT_TOKEN": "Bot User OAuth Token (xoxb-...)",
    "SLACK_APP_TOKEN": "App-Level Token for Socket Mode (xapp-...)",
    "GITHUB_TOKEN": "GitHub token with issues:write on the target repo",
    "GITHUB_OWNER": "Owner of the target repository",
    "GITHUB_REPO": "Name of the target repository",
    "AMBASSADOR_ROLE_NAME": "Slack user group allowed to save links",
}

def check_env() -> bool:
    """Print each required variable (tokens masked). Returns True when all are set."""
    print("=" * 60)
    print("Save-Link Bot Configuration Check")
    print("=" * 60)

    all_good = True
    for var, description in REQUIRED.items():
        value = os.getenv(var)
        if value:
            if "TOKEN" in var:
                masked = value[:8] + "..." if len(value) > 8 else "***"
                print(f"✓ {var}: {masked}")
            else:
                print(f"✓ {var}: {value}")
        else:
            print(f"✗ {var}: NOT SET ({description})")
            all_good = False

    print("=" * 60)

    if all_good:
        print("\n✓ All required environment variables are set!")
        print("\nStart the bot with:")
        print("   python -m savelink_bot.main_socket")
        print("\nThen run /save-link <url> [title] in Slack.")
    else:
        print("\n✗ Some environment variables are missing.")
        print("Please add them to your .env file.")

    print()
    return all_good

if __name__ == "__main__":
    raise SystemExit(0 if check_env() else 1)
