from shiftplan.main import main

main()
