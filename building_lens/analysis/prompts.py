BUILDING_ANALYSIS_PROMPT = """Analyze this building image and provide the following information in JSON format:
{
  "buildingName": "The name of the building if visible or identifiable, otherwise null",
  "architectureStyle": "The architectural style (e.g., Gothic, Modern, Art Deco, etc.) or null if unclear",
  "description": "A brief description of the building and its architectural features"
}

Please be specific about the architectural style and provide the building name only if you can clearly identify it from signs, plaques, or well-known landmarks.
"""
