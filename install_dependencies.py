#!/usr/bin/env python3
"""
Quick script to install spinfield dependencies.
Run this if you get import errors.
"""

import subprocess
import sys

def install_package(package):
    """Install a package using pip."""
    try:
        subprocess.check_call([sys.executable, "-m", "pip", "install", package])
        return True
    except subprocess.CalledProcessError:
        return False

def main():
    print("🔧 Installing spinfield Dependencies")
    print("=" * 40)

    dependencies = [
        "numpy>=1.20.0",
        "scipy>=1.7.0",
        "numba>=0.56.0",
        "h5py>=3.1.0"
    ]

    test_deps = [
        "pytest>=7.0"
    ]

    print("\n📦 Installing core dependencies...")
    failed = []

    for dep in dependencies:
        print(f"Installing {dep}...", end=" ")
        if install_package(dep):
            print("✅")
        else:
            print("❌")
            failed.append(dep)

    print("\n🧪 Installing test dependencies...")
    for dep in test_deps:
        print(f"Installing {dep}...", end=" ")
        if install_package(dep):
            print("✅")
        else:
            print("⚠️  (only needed to run the tests)")

    if failed:
        print(f"\n❌ Failed to install: {', '.join(failed)}")
        print("Try installing manually:")
        for dep in failed:
            print(f"  pip install {dep}")
        return False
    else:
        print("\n🎉 All dependencies installed successfully!")
        print("\nNow you can run:")
        print("  pytest")
        return True

if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
