# Schémas Pydantic exposés par l'API (requêtes et réponses).

from pydantic import BaseModel, Field


class BirthRequest(BaseModel):
    """Modèle de requête pour inscrire un utilisateur.

    Champs:
    - birth_date: str (YYYY-MM-DD)
    - birth_time: str (HH:MM, 24h)
    - birth_tz: str (IANA timezone)
    - lat: float (latitude décimale, [-90, 90])
    - lon: float (longitude décimale, [-180, 180])
    """

    birth_date: str = Field(..., examples=["2002-05-14"])
    birth_time: str = Field(..., examples=["09:25"])
    birth_tz: str = Field(..., examples=["Asia/Tokyo"])
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class UserCreatedResponse(BaseModel):
    """Réponse renvoyée après inscription: identifiant et thème natal."""

    user_id: str
    natal: dict


class UserResponse(BaseModel):
    """Utilisateur enregistré."""

    user_id: str
    created_at: str
    natal: dict


class CacheKey(BaseModel):
    user_id: str
    local_date: str
    tz: str


class DailyMeta(BaseModel):
    """Métadonnées de la prévision: clé, ancrage à midi local, état du cache."""

    user_id: str
    tz: str
    local_date: str
    anchored_local_noon: str
    anchored_utc: str
    cached: bool
    cache_key: CacheKey | None = None


class NatalSummary(BaseModel):
    sun_sign: str
    moon_sign: str
    rising_sign: str


class Scores(BaseModel):
    """Scores entiers dans [0, 100]."""

    overall: int
    career: int
    fortune: int
    love: int
    social: int
    study: int


class DailyContentOut(BaseModel):
    life_advice: str
    suggest_to_do: list[str]
    avoid_to_do: list[str]
    lucky_food: str
    daily_tasks: list[str]
    lucky_color: str
    lucky_numbers: list[int]
    lucky_time: str


class DailyPersonalResponse(BaseModel):
    """Prévision quotidienne personnalisée."""

    meta: DailyMeta
    natal_summary: NatalSummary
    scores: Scores
    explanations: list[str]
    daily_content: DailyContentOut


class PublicMeta(BaseModel):
    tz: str
    local_date: str
    anchored_local_noon: str
    anchored_utc: str


class Sky(BaseModel):
    """Signes du Soleil et de la Lune, longitudes par corps."""

    sun_sign: str
    moon_sign: str
    longitudes_deg: dict[str, float]


class DailyPublicResponse(BaseModel):
    """Instantané du ciel à midi local."""

    meta: PublicMeta
    sky: Sky
