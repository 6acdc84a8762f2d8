import sys
import os
import argparse
from datetime import datetime
from pr_triage import __version__
from pr_triage.constants import LANG_ENV_VAR
from pr_triage.errors import PrTriageError
from pr_triage.logging_utils import log
from pr_triage.print_utils import Print, colorize, set_verbose, set_output_file, close_output_file, print_error, print_cancelled
from pr_triage.i18n import t, set_language, get_active_language, DEFAULT_LANGUAGE
from pr_triage.preferences import get_language_preference, set_language_preference
from pr_triage.commands.triage import cmd_triage
from pr_triage.workflow import FollowUp
class SilentArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        print("")
        Print.error(message)
        Print.info(t("cli.usage"))
        print("")
        sys.exit(2)
def print_help():
    print("")
    print(colorize(t("cli.usage"), '96'))
    print("")
    print(t("cli.description"))
    for header_key, items_key in (
        ("cli.arguments_header", "cli.arguments"),
        ("cli.options_header", "cli.options"),
        ("cli.examples_header", "cli.examples"),
    ):
        items = t(items_key)
        if not isinstance(items, list):
            items = [items]
        print("")
        print(colorize(t(header_key), '93'))
        for item in items:
            print(f"  {item}")
    print("")
    sys.exit(0)
def _extract_cli_language(argv):
    lang = None
    for idx, arg in enumerate(argv):
        if arg in ("--lang", "-L", "-l"):
            if idx + 1 < len(argv):
                lang = argv[idx + 1]
            break
        if arg.startswith("--lang="):
            lang = arg.split("=", 1)[1]
            break
    return lang
def configure_language():
    """Resolve the active language from CLI flag, env vars, or saved settings."""
    cli_lang = _extract_cli_language(sys.argv)
    env_lang = os.environ.get(LANG_ENV_VAR) or os.environ.get("LANG")
    if cli_lang:
        if set_language(cli_lang):
            active = get_active_language()
            set_language_preference(active)
            return active
        Print.warn(t("cli.language_not_available", lang=cli_lang, fallback=DEFAULT_LANGUAGE))
        set_language(DEFAULT_LANGUAGE)
        return DEFAULT_LANGUAGE
    if env_lang and set_language(env_lang):
        return get_active_language()
    saved_lang = get_language_preference()
    if saved_lang and set_language(saved_lang):
        return get_active_language()
    set_language(DEFAULT_LANGUAGE)
    return DEFAULT_LANGUAGE
def build_parser():
    parser = SilentArgumentParser(
        prog="pr-triage",
        usage="",
        description="",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False
    )
    parser.add_argument("repository", nargs="?", help=argparse.SUPPRESS)
    parser.add_argument("repo_token", nargs="?", help=argparse.SUPPRESS)
    parser.add_argument(
        "-a", "--action",
        choices=[f.value for f in FollowUp],
        default=FollowUp.ASSIGN.value,
        help=argparse.SUPPRESS
    )
    parser.add_argument("--client-mutation-id", help=argparse.SUPPRESS)
    parser.add_argument("-o", "--output", nargs='?', const='', help=argparse.SUPPRESS)
    parser.add_argument("-L", "-l", "--lang", help=argparse.SUPPRESS)
    parser.add_argument("-h", "--help", action="store_true", help=argparse.SUPPRESS)
    return parser
def _default_output_name(repository):
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    repo_part = (repository or "repository").strip().replace('/', '_')
    return f"triage_{repo_part}_{timestamp}.txt"
def main_cli():
    configure_language()
    if "--version" in sys.argv or "-v" in sys.argv:
        print(f"pr-triage v{__version__}")
        sys.exit(0)
    if "--verbose" in sys.argv or "-V" in sys.argv:
        set_verbose(True)
        Print.warn(t("cli.verbose_enabled"))
        sys.argv = [a for a in sys.argv if a not in ["--verbose", "-V"]]
    parser = build_parser()
    args, unknown = parser.parse_known_args(sys.argv[1:])
    if unknown:
        print("")
        Print.error(t("cli.unknown_args", args=' '.join(unknown)))
        print("")
        sys.exit(2)
    if args.help:
        print_help()
    if not args.repository:
        parser.error(t("cli.missing_repository"))
    output_file = args.output
    if output_file is not None:
        if not output_file:
            output_file = _default_output_name(args.repository)
        set_output_file(output_file)
    try:
        cmd_triage(args)
    except KeyboardInterrupt:
        print("")
        print_cancelled(t("cli.cancelled"))
        close_output_file()
        sys.exit(130)
    except PrTriageError as e:
        print("")
        print_error(str(e))
        print("")
        log(f"Command error: {type(e).__name__}: {e}", level="ERROR")
        close_output_file()
        sys.exit(1)
    except Exception as e:
        print_error(t("cli.unexpected_error", error=str(e)))
        log(f"Unexpected error: {e!r}", level="ERROR")
        close_output_file()
        sys.exit(1)
    close_output_file()
