from launchboard.cli import main

main()
