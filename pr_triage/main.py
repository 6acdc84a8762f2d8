import sys
from pr_triage.print_utils import Print
def main():
    try:
        from pr_triage.cli import main_cli
        main_cli()
    except Exception as e:
        from pr_triage.errors import PrTriageError
        if isinstance(e, PrTriageError):
            Print.error(str(e))
        else:
            Print.critical_error(f"Fatal error: {e}")
        sys.exit(1)
if __name__ == "__main__":
    main()
