#!/usr/bin/env python3
"""
Pre-flight Check Script for Production Deployment
Validates environment variables, the data source and application startup
Exits with non-zero code if any check fails
"""

import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def check_required_env_var(name, min_length=None):
    """Check if required environment variable exists and optionally validate length"""
    value = os.environ.get(name, '').strip()

    if not value:
        print(f"❌ ERROR: Required environment variable '{name}' is not set", file=sys.stderr)
        return False

    if min_length and len(value) < min_length:
        print(f"❌ ERROR: Environment variable '{name}' must be at least {min_length} characters (current: {len(value)})", file=sys.stderr)
        return False

    print(f"✅ {name}: Set (length: {len(value)})")
    return True


def check_data_source():
    """Check that DATA_SOURCE is known and has what it needs"""
    from trainingcycle import config

    if config.DATA_SOURCE == 'graphql':
        print(f"✅ DATA_SOURCE: graphql ({config.GRAPHQL_URL})")
        if config.HASURA_ADMIN_SECRET:
            print("ℹ️  HASURA_ADMIN_SECRET: Set")
        else:
            print("ℹ️  HASURA_ADMIN_SECRET: Not set (requests go out unauthenticated)")
        return True

    if config.DATA_SOURCE == 'json':
        data_dir = Path(config.DATA_DIR)
        if not data_dir.is_dir():
            print(f"❌ ERROR: DATA_DIR '{data_dir}' does not exist", file=sys.stderr)
            return False
        print(f"✅ DATA_SOURCE: json ({data_dir})")
        return True

    print(f"❌ ERROR: Unknown DATA_SOURCE '{config.DATA_SOURCE}' (expected 'graphql' or 'json')", file=sys.stderr)
    return False


def check_app_import():
    """Check if application can be imported and initialized"""
    try:
        from trainingcycle.main import create_app
        create_app()
        print("✅ Application imports and initializes successfully")
        return True
    except (RuntimeError, ValueError) as e:
        print(f"❌ ERROR: Application initialization failed: {e}", file=sys.stderr)
        return False


def main():
    """Run all pre-flight checks"""
    print("=" * 60)
    print("TrainingCycle Pre-Flight Check")
    print("=" * 60)
    print()

    all_passed = True

    print("Checking required environment variables...")
    all_passed &= check_required_env_var('SECRET_KEY', min_length=32)
    print()

    flask_env = os.environ.get('FLASK_ENV', '').strip()
    if flask_env.lower() == 'production':
        print(f"✅ FLASK_ENV: {flask_env} (production mode)")
    else:
        print(f"⚠️  WARNING: FLASK_ENV is not set to 'production' (current: '{flask_env}')")
        print("   HTTPS redirects and HSTS are disabled")
    print()

    print("Checking data source...")
    all_passed &= check_data_source()
    print()

    print("Checking application initialization...")
    all_passed &= check_app_import()
    print()

    print("=" * 60)
    if all_passed:
        print("✅ All pre-flight checks passed!")
        return 0
    else:
        print("❌ Pre-flight checks FAILED")
        print("   Please fix the errors above before deploying.")
        return 1


if __name__ == '__main__':
    sys.exit(main())
