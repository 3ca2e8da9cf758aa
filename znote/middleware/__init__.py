"""
Middleware delle richieste (autenticazione con token bearer).
"""
