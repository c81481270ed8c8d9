"""Allow ``python -m ec2_automation``."""

from ec2_automation.cli.main import main

if __name__ == "__main__":
    main()
