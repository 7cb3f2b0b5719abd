"""User-facing strings in Spanish and English."""

MESSAGES: dict[str, dict[str, str]] = {
    "es": {
        "config_headline": "Error de Configuración",
        "config_description": "Error: API Key no configurada.",
        "config_message": "La API Key de Gemini no está configurada. Por favor, asegúrate de que la variable de entorno GEMINI_API_KEY esté disponible.",
        "no_creative_headline": "Error",
        "no_creative_description": "Error: No se proporcionaron creativos.",
        "no_creative_message": "No se proporcionaron creativos para el análisis.",
        "safety_headline": "Error: Respuesta Bloqueada por Seguridad",
        "safety_message": "El contenido del creativo puede haber sido identificado como sensible.",
        "recitation_headline": "Error: Respuesta Bloqueada por Recitación",
        "recitation_message": "El contenido es demasiado similar a material protegido por derechos de autor.",
        "max_tokens_headline": "Error: Límite de Tokens Alcanzado",
        "max_tokens_message": "Se alcanzó el límite máximo de tokens. Intenta con un creativo más simple.",
        "empty_headline": "Error: Fallo de Generación",
        "empty_message": "La respuesta de la IA está vacía. Esto puede ocurrir si el modelo no puede procesar el archivo o si la respuesta fue bloqueada por otras razones.",
        "analysis_headline": "Error de Análisis",
        "analysis_message": "Hubo un error al generar las recomendaciones.",
        "invalid_json_message": "La respuesta de la IA no es un JSON válido.",
        "no_history": "No hay historial previo.",
        "history_intro": "A continuación se muestran los datos de los últimos creativos analizados para este cliente. Utiliza esta información para identificar patrones, estilos recurrentes o campañas y adaptar tus recomendaciones para que sean más coherentes y estratégicas con el historial de la cuenta.",
        "client_line": "Analizando para el cliente: {name} (Moneda: {currency})",
        "language_name": "ESPAÑOL",
        "insights_error": "Error generando insights",
    },
    "en": {
        "config_headline": "Configuration Error",
        "config_description": "Error: API Key not set.",
        "config_message": "The Gemini API Key is not configured. Please ensure the GEMINI_API_KEY environment variable is available.",
        "no_creative_headline": "Error",
        "no_creative_description": "Error: No creatives provided.",
        "no_creative_message": "No creatives were provided for analysis.",
        "safety_headline": "Error: Response Blocked for Safety",
        "safety_message": "The creative content may have been identified as sensitive.",
        "recitation_headline": "Error: Response Blocked for Recitation",
        "recitation_message": "The content is too similar to copyrighted material.",
        "max_tokens_headline": "Error: Token Limit Reached",
        "max_tokens_message": "The maximum token limit was reached. Try with a simpler creative.",
        "empty_headline": "Error: Generation Failed",
        "empty_message": "The AI response is empty. This can occur if the model cannot process the file or if the response was blocked for other reasons.",
        "analysis_headline": "Analysis Error",
        "analysis_message": "There was an error generating the recommendations.",
        "invalid_json_message": "The AI response is not valid JSON.",
        "no_history": "No prior history.",
        "history_intro": "Below is the data of the latest creatives analysed for this client. Use it to identify patterns, recurring styles or campaigns and make your recommendations more consistent and strategic with the account history.",
        "client_line": "Analysing for client: {name} (Currency: {currency})",
        "language_name": "ENGLISH",
        "insights_error": "Error generating insights",
    },
}


def message(language: str, key: str, **kwargs) -> str:
    """Localized string; unknown languages fall back to English."""
    text = MESSAGES.get(language, MESSAGES["en"])[key]
    return text.format(**kwargs) if kwargs else text
