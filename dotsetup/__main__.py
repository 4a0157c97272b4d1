from dotsetup.cli.app import main

main()
