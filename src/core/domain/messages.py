"""Catálogo de mensajes orientados al usuario.

Por qué un catálogo:
- El motor de conciliación y el adaptador IA producen texto que la UI muestra
  tal cual (notificaciones); centralizarlo evita strings duplicados.
- Permite servir la misma decisión en inglés o francés sin tocar la lógica.
"""

from __future__ import annotations

from core.domain.language import Language

_MESSAGES: dict[str, dict[Language, str]] = {
    # Conciliación
    "serial_mismatch": {
        Language.ENGLISH: "The extracted serial number ({extracted}) does not match the declared serial number ({declared}).",
        Language.FRENCH: "Le numéro de série extrait ({extracted}) ne correspond pas au numéro de série saisi ({declared}).",
    },
    "ram_mismatch": {
        Language.ENGLISH: "The extracted RAM ({extracted}) does not match the declared RAM ({declared}).",
        Language.FRENCH: "La RAM extraite ({extracted}) ne correspond pas à la RAM saisie ({declared}).",
    },
    "storage_mismatch": {
        Language.ENGLISH: "The extracted storage ({extracted}) does not match the declared storage ({declared}).",
        Language.FRENCH: "Le stockage extrait ({extracted}) ne correspond pas au stockage saisi ({declared}).",
    },
    "imei_slot_mismatch": {
        Language.ENGLISH: "The declared {slot} ({declared}) does not match the extracted {slot} ({extracted}).",
        Language.FRENCH: "L'{slot} saisi ({declared}) ne correspond pas à l'{slot} extrait ({extracted}).",
    },
    "imei_no_match": {
        Language.ENGLISH: "The declared IMEI ({declared}) matches none of the extracted IMEIs (IMEI1: {imei1}, IMEI2: {imei2}).",
        Language.FRENCH: "L'IMEI saisi ({declared}) ne correspond à aucun des IMEI extraits (IMEI1: {imei1}, IMEI2: {imei2}).",
    },
    "imei_single_mismatch": {
        Language.ENGLISH: "The declared IMEI ({declared}) does not match the IMEI read from the image ({extracted}).",
        Language.FRENCH: "L'IMEI saisi ({declared}) ne correspond pas à l'IMEI extrait ({extracted}).",
    },
    "imei_swapped_warning": {
        Language.ENGLISH: "Both IMEIs were found on the image but in swapped order: the declared IMEI1 is the extracted IMEI2 and vice versa.",
        Language.FRENCH: "Les deux IMEI ont été trouvés sur l'image mais semblent inversés : l'IMEI1 saisi correspond à l'IMEI2 extrait et vice versa.",
    },
    "imei_swapped_suggestion": {
        Language.ENGLISH: "Swap the two IMEIs so that IMEI1 is {imei1} and IMEI2 is {imei2}.",
        Language.FRENCH: "Inversez les deux IMEI pour que l'IMEI1 soit {imei1} et l'IMEI2 soit {imei2}.",
    },
    "imei_second_detected_warning": {
        Language.ENGLISH: "A second IMEI was detected on the image but was not declared.",
        Language.FRENCH: "Un second IMEI a été détecté sur l'image mais n'a pas été saisi.",
    },
    "imei_second_detected_suggestion": {
        Language.ENGLISH: "Enter the second IMEI ({imei}) to fully register this dual-SIM phone.",
        Language.FRENCH: "Veuillez saisir le second IMEI ({imei}) pour valider complètement votre téléphone dual-SIM.",
    },
    "imei_secondary_entered_warning": {
        Language.ENGLISH: "The IMEI you entered ({imei}) appears to be the secondary IMEI (IMEI2) of this phone.",
        Language.FRENCH: "L'IMEI saisi ({imei}) semble être l'IMEI secondaire (IMEI2) de ce téléphone.",
    },
    "imei_primary_suggestion": {
        Language.ENGLISH: "Enter the primary IMEI ({imei}) in the IMEI1 field as well.",
        Language.FRENCH: "Veuillez également saisir l'IMEI principal ({imei}) dans le champ IMEI1.",
    },
    "imei_move_to_secondary_suggestion": {
        Language.ENGLISH: "Move the IMEI you entered ({imei}) to the IMEI2 field.",
        Language.FRENCH: "Déplacez l'IMEI saisi ({imei}) dans le champ IMEI2.",
    },
    "imei_single_read_warning": {
        Language.ENGLISH: "Only one IMEI ({imei}) could be read from the image; the other declared IMEI could not be checked.",
        Language.FRENCH: "Un seul IMEI ({imei}) a pu être extrait de l'image ; l'autre IMEI saisi n'a pas pu être vérifié.",
    },
    # Proveedor IA
    "missing_api_key": {
        Language.ENGLISH: "The AI provider API key is not configured. Set SECURITEL_AI_API_KEY or run `securitel doctor setup-ai`.",
        Language.FRENCH: "La clé API du fournisseur IA n'est pas configurée. Définissez SECURITEL_AI_API_KEY ou lancez `securitel doctor setup-ai`.",
    },
    "provider_auth": {
        Language.ENGLISH: "The AI provider rejected the API key. Check your configuration.",
        Language.FRENCH: "Clé API du fournisseur IA invalide. Veuillez vérifier votre configuration.",
    },
    "provider_forbidden": {
        Language.ENGLISH: "Access denied. Check the permissions of your API key for this model.",
        Language.FRENCH: "Accès refusé. Vérifiez les permissions de votre clé API pour ce modèle.",
    },
    "provider_rate_limit": {
        Language.ENGLISH: "AI provider quota exceeded. Please try again later.",
        Language.FRENCH: "Quota du fournisseur IA dépassé. Veuillez réessayer plus tard.",
    },
    "provider_server": {
        Language.ENGLISH: "AI provider server error ({status}). Please try again later.",
        Language.FRENCH: "Erreur serveur du fournisseur IA ({status}). Veuillez réessayer plus tard.",
    },
    "provider_status": {
        Language.ENGLISH: "AI provider error ({status}).",
        Language.FRENCH: "Erreur du fournisseur IA ({status}).",
    },
    "provider_network": {
        Language.ENGLISH: "Unable to reach the AI provider. Check your internet connection.",
        Language.FRENCH: "Impossible de contacter le fournisseur IA. Vérifiez votre connexion internet.",
    },
    "provider_timeout": {
        Language.ENGLISH: "The AI provider did not answer within {seconds:g} seconds.",
        Language.FRENCH: "Le fournisseur IA n'a pas répondu dans les {seconds:g} secondes.",
    },
}


def render(key: str, language: Language, **values: object) -> str:
    """Devuelve el mensaje `key` en `language`, con los valores interpolados."""

    templates = _MESSAGES[key]
    template = templates.get(language) or templates[Language.ENGLISH]
    return template.format(**values)
