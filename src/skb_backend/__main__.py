from skb_backend.main import main

main()
