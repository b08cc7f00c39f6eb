"""capitra: traducción de documentos largos capítulo a capítulo."""

__version__ = "0.1.0"
