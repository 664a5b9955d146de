from weeek_cli.cli import main

main()
