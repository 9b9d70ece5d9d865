#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from cbot_app.config.loader import ConfigLoader
from cbot_app.config.validation import ConfigValidator


def main():
    """Main validation function."""
    print("🔍 Validating CBOT snapshot configuration...")

    loader = ConfigLoader.create()
    print(f"📁 Config directory: {loader.config_dir}")

    try:
        config = loader.merge_config()
    except Exception as e:
        print(f"❌ Error loading configuration: {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(config)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)
    print("✅ Settings are valid")

    store = config["store"]
    missing = [name for name, key in (("REDIS_URL", "url"), ("REDIS_PASSWORD", "password"))
               if not store.get(key)]
    if missing:
        print(f"⚠️  Redis credentials not set: {', '.join(missing)}")
        print("   /api/v1/market-data will answer with an error body")

    print("\n🎉 Configuration validation passed!")
    sys.exit(0)


if __name__ == "__main__":
    main()
