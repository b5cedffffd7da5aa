import sys


def main() -> int:
    args = [a for a in sys.argv[1:] if a]
    if args:
        from .cli import main as cli_main

        return cli_main(args)

    from .ui.tui_main import main as tui_main

    return tui_main()


if __name__ == "__main__":
    raise SystemExit(main())
