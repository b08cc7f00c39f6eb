# capitra/errors.py


class AbortedError(Exception):
    """El llamador pidió cancelar el trabajo. Nunca se reintenta."""
    pass


class BackendError(Exception):
    """
    El backend falló en todos los intentos.
    El mensaje es el del último error original, para clasificarlo aguas arriba.
    """
    pass
