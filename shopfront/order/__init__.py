"""Order storage, pricing through the inventory service, and the order HTTP API."""