# absence_api/core/errors.py
"""Exceptions métier.

Chaque erreur porte son code HTTP ; le gestionnaire enregistré dans
``main.py`` les transforme en ``{"message": ...}``.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Erreur interne du serveur."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InternalError(AppError):
    pass


class ValidationError(AppError):
    status_code = 400
    default_message = "Données invalides."


class Conflict(AppError):
    status_code = 400
    default_message = "Conflit avec l'état actuel de la ressource."


class DuplicateAccount(Conflict):
    default_message = "Un utilisateur avec cet email existe déjà."


class AlreadyActivated(Conflict):
    default_message = "Ce compte étudiant a déjà été activé. Veuillez vous connecter."


class ReferenceConflict(Conflict):
    default_message = "Cette ressource est encore référencée."


class InvalidTransition(Conflict):
    default_message = "Cette justification a déjà été traitée."


class RoleNotAllowed(AppError):
    status_code = 400
    default_message = (
        "Cet endpoint est réservé aux comptes administrateur. "
        "Les étudiants doivent utiliser /api/auth/activate-student."
    )


class Unauthorized(AppError):
    status_code = 401
    default_message = "Non authentifié."


class InvalidCredentials(Unauthorized):
    default_message = "Email ou mot de passe incorrect."


class InvalidToken(Unauthorized):
    default_message = "Token invalide ou expiré."


class Forbidden(AppError):
    status_code = 403
    default_message = "Accès refusé."


class NotFound(AppError):
    status_code = 404
    default_message = "Ressource non trouvée."


class StudentNotFound(NotFound):
    default_message = (
        "Aucun étudiant trouvé avec cet email. "
        "Veuillez contacter l'administrateur."
    )
