from orgsync.cli.app import main

main()
