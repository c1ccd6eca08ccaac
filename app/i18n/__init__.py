from app.i18n.core import SUPPORTED_LANGS, load_lang, t

__all__ = ["SUPPORTED_LANGS", "load_lang", "t"]
