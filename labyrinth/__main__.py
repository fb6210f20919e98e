from .metrics_simulator import main

main()
