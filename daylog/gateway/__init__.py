"""API gateway that checks access tokens and forwards requests to the services."""