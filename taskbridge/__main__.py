from taskbridge.server import main

main()
