from weeek_cli.mcp_server import main

main()
