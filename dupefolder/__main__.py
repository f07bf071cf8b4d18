"""
Allow running the package with: python -m dupefolder

Examples:
    python -m dupefolder /path/to/photos              # Analyze (quick mode)
    python -m dupefolder /a /b --mode deep            # Analyze two trees
    python -m dupefolder config                       # Show configuration
    python -m dupefolder config --init                # Create example config file
    python -m dupefolder ./config                     # Analyze a folder named "config"
"""

import sys


def show_config(argv: list[str]) -> int:
    from .user_config import get_user_config

    config = get_user_config()

    if '--init' in argv or '-i' in argv:
        if config.create_example_config():
            print("✓ Created example configuration file at:")
            print(f"  {config.config_file_path}")
            print("\nEdit this file to customize DupeFolder settings.")
            return 0
        print("✗ Failed to create configuration file.")
        return 1

    print(f"Configuration file: {config.config_file_path}")
    if config.config_file_path.exists():
        print("Status: ✓ Found")
    else:
        print("Status: ✗ Not found (using defaults)")
        print("\nRun 'python -m dupefolder config --init' to create one.")

    print("\nCurrent settings:")
    print(f"  default_mode: {config.default_mode.name.lower()}")
    print(f"  cache_file: {config.cache_file}")

    from .scanner.dependencies import dependency_report

    print("\nLibraries:")
    for name, version in dependency_report().items():
        print(f"  {name}: {version}")
    return 0


def main() -> int:
    if len(sys.argv) > 1 and sys.argv[1] == 'config':
        return show_config(sys.argv[2:])

    from .cli import main as cli_main
    return cli_main(sys.argv[1:])


if __name__ == '__main__':
    sys.exit(main())
