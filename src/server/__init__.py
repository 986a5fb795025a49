"""HTTP and websocket front end for the elevator simulation."""
