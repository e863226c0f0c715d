"""HTTP and WebSocket front end for the elevator dispatch simulation."""
