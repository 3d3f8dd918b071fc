from flask import current_app, g, has_request_context, request

MESSAGES = {
    "en": {
        "common.forbidden": "Access forbidden.",
        "common.unknown": "Unknown",
        "common.login_required": "Please log in.",
        "common.setup_required": "No account exists yet. Create the administrator account.",
        "errors.invalid_credentials": "Invalid email or password.",
        "errors.too_many_attempts_timed": "Too many attempts. Try again in {seconds} seconds.",
        "errors.too_many_attempts_blocked": "Too many failed attempts. Login is blocked for {seconds} seconds.",
        "errors.generic_server_error": "An internal error occurred.",
        "errors.setup_error": "Could not create the administrator account.",
        "errors.username_required": "A username is required.",
        "errors.email_invalid": "The email address is invalid.",
        "errors.password_too_short": "The password is too short.",
        "errors.password_too_long": "The password is too long (72 bytes at most).",
        "errors.username_taken": "This username is already taken.",
        "errors.email_taken": "This email address is already in use.",
        "errors.account_exists": "This account already exists.",
        "errors.current_password_incorrect": "The current password is incorrect.",
        "errors.invalid_theme": "Unknown theme.",
        "errors.invalid_language": "Unsupported language.",
        "errors.invalid_backup": "Invalid backup data.",
        "errors.import_failed": "Backup import failed.",
        "errors.export_failed": "Backup export failed.",
        "messages.username_current": "This is your current username.",
        "messages.username_available": "This username is available.",
        "messages.password_updated": "Password updated. Please log in again.",
        "messages.theme_updated": "Theme updated.",
        "messages.user_created": "User {name} created.",
        "messages.user_deleted": "User deleted.",
        "messages.delete_self_error": "You cannot delete your own account.",
        "messages.password_reset_success": "Password of {name} has been reset.",
        "messages.ip_blocked": "IP address blocked.",
        "messages.ip_unblocked": "IP address unblocked.",
        "messages.ip_invalid": "This is not a valid IP address.",
    },
    "fr": {
        "common.forbidden": "Accès interdit.",
        "common.unknown": "Inconnu",
        "common.login_required": "Veuillez vous connecter.",
        "common.setup_required": "Aucun compte n'existe encore. Créez le compte administrateur.",
        "errors.invalid_credentials": "Email ou mot de passe incorrect.",
        "errors.too_many_attempts_timed": "Trop de tentatives. Réessayez dans {seconds} secondes.",
        "errors.too_many_attempts_blocked": "Trop d'échecs. La connexion est bloquée pendant {seconds} secondes.",
        "errors.generic_server_error": "Une erreur interne est survenue.",
        "errors.setup_error": "Impossible de créer le compte administrateur.",
        "errors.username_required": "Le nom d'utilisateur est obligatoire.",
        "errors.email_invalid": "L'adresse email est invalide.",
        "errors.password_too_short": "Le mot de passe est trop court.",
        "errors.password_too_long": "Le mot de passe est trop long (72 octets maximum).",
        "errors.username_taken": "Ce nom d'utilisateur est déjà pris.",
        "errors.email_taken": "Cette adresse email est déjà utilisée.",
        "errors.account_exists": "Ce compte existe déjà.",
        "errors.current_password_incorrect": "Le mot de passe actuel est incorrect.",
        "errors.invalid_theme": "Thème inconnu.",
        "errors.invalid_language": "Langue non prise en charge.",
        "errors.invalid_backup": "Données de sauvegarde invalides.",
        "errors.import_failed": "L'import de la sauvegarde a échoué.",
        "errors.export_failed": "L'export de la sauvegarde a échoué.",
        "messages.username_current": "C'est votre nom d'utilisateur actuel.",
        "messages.username_available": "Ce nom d'utilisateur est disponible.",
        "messages.password_updated": "Mot de passe mis à jour. Veuillez vous reconnecter.",
        "messages.theme_updated": "Thème mis à jour.",
        "messages.user_created": "Utilisateur {name} créé !",
        "messages.user_deleted": "Utilisateur supprimé.",
        "messages.delete_self_error": "Vous ne pouvez pas supprimer votre propre compte.",
        "messages.password_reset_success": "Le mot de passe de {name} a été réinitialisé.",
        "messages.ip_blocked": "Adresse IP bloquée.",
        "messages.ip_unblocked": "Adresse IP débloquée.",
        "messages.ip_invalid": "Ce n'est pas une adresse IP valide.",
    },
}


def _supported():
    return current_app.config.get("SUPPORTED_LANGUAGES", ("fr", "en"))


def _default():
    return current_app.config.get("DEFAULT_LANGUAGE", "fr")


def negotiate_language() -> str:
    if not has_request_context():
        return _default()

    supported = _supported()
    identity = getattr(g, "identity", None)
    user = getattr(identity, "user", None)
    if user is not None and user.language in supported:
        return user.language

    for candidate in (request.args.get("lng"), request.cookies.get("lang")):
        if candidate in supported:
            return candidate

    return request.accept_languages.best_match(supported) or _default()


def translate(key: str, lang: str | None = None, **params) -> str:
    lang = lang or negotiate_language()
    catalogue = MESSAGES.get(lang) or MESSAGES["en"]
    text = catalogue.get(key) or MESSAGES["en"].get(key, key)
    return text.format(**params) if params else text
