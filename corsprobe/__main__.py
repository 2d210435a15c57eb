from corsprobe.cli import main

main()
