from comment_miner.cli.app import main

main()
