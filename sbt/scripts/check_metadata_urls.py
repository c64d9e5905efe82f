"""
Check the hosted token image and metadata JSON.

Fetches both GitHub Pages URLs, prints the metadata summary and runs the
presence checks. Exit code 1 if any URL is unreachable or a check fails.
"""
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

import httpx

from domain.constants import EXIT_CONFIG_ERROR, EXIT_FAILURE, EXIT_OK
from exceptions import ConfigurationError
from scripts.common import load_settings
from services.metadata_service import check_url, describe_metadata, metadata_passes, validate_metadata

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"❌ Configuration Error: {e.message}")
        return EXIT_CONFIG_ERROR

    urls = {
        "Image URL": settings.image_url,
        "Metadata URL": settings.metadata_uri,
    }

    print("🌐 Metadata URL Checker & Validator")
    print("=" * 48)
    print(f"👤 GitHub Username: {settings.github_username}")
    print(f"📁 Repository: {settings.github_repo}")
    print(f"🌐 Base URL: {settings.metadata_base_url}")
    print()

    all_working = True
    with httpx.Client(timeout=10.0, follow_redirects=True) as client:
        for name, url in urls.items():
            check = check_url(client, name, url, parse_json=(name == "Metadata URL"))
            print(f"{'✅' if check.ok else '❌'} {name}: {url}"
                  + ("" if check.ok else f" ({check.error})"))

            if check.metadata is not None:
                print("\n".join(describe_metadata(check.metadata)))
                print()
                print("   ✅ Validation Results:")
                checks = validate_metadata(check.metadata, settings.solana_cluster.label)
                for label, result in checks:
                    if isinstance(result, bool):
                        print(f"   {'✅' if result else '❌'} {label}")
                    else:
                        print(f"   📊 {label}: {result}")
                all_working = all_working and metadata_passes(checks)

            all_working = all_working and check.ok
            print()

    print("📋 Summary:")
    print("===========")
    if all_working:
        print("🎉 All URLs are working correctly!")
        print("✅ Ready to run: python scripts/create_sbt.py")
        return EXIT_OK

    print("❌ Some URLs are not working yet.")
    print()
    print("💡 Troubleshooting steps:")
    print(f"1. Make sure the GitHub repository exists: {settings.github_repo}")
    print(f"2. Upload images/{settings.image_filename} and metadata/{settings.metadata_filename}")
    print("3. Enable GitHub Pages: Settings > Pages > Deploy from a branch > main > / (root)")
    print("4. Wait 2-5 minutes for deployment and run this script again")
    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
