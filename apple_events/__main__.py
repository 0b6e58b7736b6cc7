from apple_events.cli.main import main

main()
