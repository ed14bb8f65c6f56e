"""Request handlers for the API and the Flask routes that bind them."""