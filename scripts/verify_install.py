#!/usr/bin/env python
"""
Raster Lab - Installation Verification Script

Run this script to verify all dependencies are correctly installed.
"""

import sys
from pathlib import Path

# Add project root to path for package import
sys.path.insert(0, str(Path(__file__).parent.parent))


def check_package(name: str, import_name: str = None, version_attr: str = "__version__") -> tuple[bool, str]:
    """Check if a package is installed and return version."""
    import_name = import_name or name
    try:
        module = __import__(import_name)
        version = getattr(module, version_attr, "unknown")
        return True, str(version)
    except ImportError as e:
        return False, str(e)


def check_constants() -> tuple[bool, str]:
    """Check if constants module loads correctly."""
    try:
        from rasterlab.constants import (
            DEFAULT_BOX_SIZE,
            POSTERIZE_HIGH_LEVEL,
            Operation,
        )
        return True, f"loaded ({DEFAULT_BOX_SIZE=}, {POSTERIZE_HIGH_LEVEL=}, {len(Operation.ALL)} operations)"
    except ImportError as e:
        return False, str(e)


def check_settings() -> tuple[bool, str]:
    """Check if settings.yaml loads correctly."""
    try:
        from rasterlab.cli import load_settings
        settings_path = Path(__file__).parent.parent / "config" / "settings.yaml"
        if not settings_path.exists():
            return False, "settings.yaml not found"
        settings = load_settings(str(settings_path))
        return True, f"keys: {', '.join(settings.keys())}"
    except Exception as e:
        return False, str(e)


def check_smoke_transform() -> tuple[bool, str]:
    """Run one transform on a tiny picture."""
    try:
        from rasterlab import RasterImage, ImageTransformer
        image = RasterImage(4, 3)
        negative = ImageTransformer(image).negative()
        white = negative.get_pixel(0, 0) & 0xFFFFFF
        return white == 0xFFFFFF, f"negative of black -> #{white:06X}"
    except Exception as e:
        return False, str(e)


def main():
    print("=" * 60)
    print("Raster Lab - Installation Verification")
    print("=" * 60)
    print()

    results = []

    # Core packages
    print("Core Dependencies:")
    print("-" * 40)

    packages = [
        ("numpy", "numpy", "__version__"),
        ("pillow", "PIL", "__version__"),
        ("pyyaml", "yaml", "__version__"),
        ("opencv", "cv2", "__version__"),
    ]

    for name, import_name, version_attr in packages:
        ok, info = check_package(name, import_name, version_attr)
        status = "PASS" if ok else "FAIL"
        print(f"  {name:25} [{status}] {info}")
        results.append((name, ok))

    print()
    print("Test Dependencies:")
    print("-" * 40)

    for name, import_name in (("pytest", "pytest"),):
        ok, info = check_package(name, import_name)
        status = "PASS" if ok else "WARN"  # Only needed to run the tests
        print(f"  {name:25} [{status}] {info}")

    print()
    print("Configuration:")
    print("-" * 40)

    # Constants
    ok, info = check_constants()
    status = "PASS" if ok else "FAIL"
    print(f"  {'constants.py':25} [{status}] {info}")
    results.append(("constants", ok))

    # Settings
    ok, info = check_settings()
    status = "PASS" if ok else "FAIL"
    print(f"  {'settings.yaml':25} [{status}] {info}")
    results.append(("settings", ok))

    # Smoke transform
    ok, info = check_smoke_transform()
    status = "PASS" if ok else "FAIL"
    print(f"  {'transform':25} [{status}] {info}")
    results.append(("transform", ok))

    print()
    print("=" * 60)

    # Summary
    passed = sum(1 for _, ok in results if ok)
    total = len(results)

    if passed == total:
        print(f"ALL CHECKS PASSED ({passed}/{total})")
        print("Environment is ready for picture processing.")
        return 0
    else:
        failed = [name for name, ok in results if not ok]
        print(f"SOME CHECKS FAILED ({passed}/{total})")
        print(f"Failed: {', '.join(failed)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
