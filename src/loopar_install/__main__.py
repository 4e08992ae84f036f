from loopar_install import main

main()
