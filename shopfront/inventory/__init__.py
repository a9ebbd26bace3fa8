"""Product storage and pricing, with the inventory HTTP API and gRPC product info server."""