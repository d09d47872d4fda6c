"""Application layer: ports and use cases of the asynchronous writer."""
