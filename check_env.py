#!/usr/bin/env python3
"""Helper script to inspect or create the .env file for the CRM backend."""

from pathlib import Path
import os
import sys

ENV_TEMPLATE = """# Local store (always used)
CRM_DATA_ROOT=./data
CRM_LOCAL_DB_FILE=./data/crm.sqlite3

# Supabase mirror (optional - leave both empty to run local only)
# Get these from: https://supabase.com/dashboard -> Your Project -> Settings -> API
CRM_SUPABASE_URL=
CRM_SUPABASE_KEY=

# API Configuration
CRM_API_PREFIX=/api
# CRM_FRONTEND_ALLOWED_ORIGINS accepts a JSON array or comma-separated list
# CRM_MIRROR_MAX_WORKERS=8
"""


def _mask(value: str, keep: int = 20) -> str:
    if len(value) <= keep + 10:
        return value
    return value[:keep] + "..." + value[-10:]


def main() -> None:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Visit CRM Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        with open(env_file, "w", encoding="utf-8") as f:
            f.write(ENV_TEMPLATE)
        print(f"✅ Created template .env file at: {env_file}")
        print("   Fill in CRM_SUPABASE_URL and CRM_SUPABASE_KEY to enable the remote mirror.")
        return

    print(f"✅ Found .env file at: {env_file}")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        name, sep, value = line.partition("=")
        if sep and "KEY" in name and value.strip():
            print(f"{name}={_mask(value.strip())}")
        else:
            print(line)
    print("-" * 60)
    print()

    for name in ("CRM_SUPABASE_URL", "CRM_SUPABASE_KEY"):
        value = os.getenv(name)
        if value:
            print(f"✅ {name} (from environment): {_mask(value)}")
        else:
            print(f"ℹ️  {name} not set in environment (the .env file may still provide it)")
    print()

    try:
        sys.path.insert(0, str(project_root / "src"))
        from visit_crm.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    print(f"Local database: {settings.local_db_file}")
    if settings.local_db_file.exists():
        print("✅ Local database exists")
    else:
        print("ℹ️  Local database will be created on first request")
    print()

    print("=" * 60)
    if settings.remote_configured:
        print("✅ Supabase mirror is configured")
    else:
        print("ℹ️  Supabase mirror is NOT configured - all data stays local")
        print("   Both CRM_SUPABASE_URL and CRM_SUPABASE_KEY are needed to enable it.")
    print("=" * 60)


if __name__ == "__main__":
    main()
