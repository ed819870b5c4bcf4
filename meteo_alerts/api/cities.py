"""정적 도시 목록 검색입니다. / Static city list search."""

from __future__ import annotations

from typing import List

from ..base import MeteoBaseModel


class City(MeteoBaseModel):
    """도시 좌표입니다. / City with coordinates."""

    name: str
    lat: float
    lon: float
    country: str


CITIES: List[City] = [
    City(name="Madrid", lat=40.4168, lon=-3.7038, country="ES"),
    City(name="Barcelona", lat=41.3851, lon=2.1734, country="ES"),
    City(name="Valencia", lat=39.4699, lon=-0.376, country="ES"),
    City(name="Sevilla", lat=37.3886, lon=-5.9823, country="ES"),
    City(name="Bilbao", lat=43.2627, lon=-2.9355, country="ES"),
    City(name="Málaga", lat=36.7213, lon=-3.7437, country="ES"),
    City(name="Palma", lat=39.5696, lon=2.6502, country="ES"),
    City(name="Alicante", lat=38.3452, lon=-0.481, country="ES"),
    City(name="Córdoba", lat=37.8882, lon=-4.7794, country="ES"),
    City(name="Murcia", lat=37.9922, lon=-1.1307, country="ES"),
    City(name="New York", lat=40.7128, lon=-74.006, country="US"),
    City(name="London", lat=51.5074, lon=-0.1278, country="UK"),
    City(name="Paris", lat=48.8566, lon=2.3522, country="FR"),
    City(name="Berlin", lat=52.52, lon=13.405, country="DE"),
    City(name="Amsterdam", lat=52.3676, lon=4.9041, country="NL"),
    City(name="Rome", lat=41.9028, lon=12.4964, country="IT"),
    City(name="Vienna", lat=48.2082, lon=16.3738, country="AT"),
    City(name="Prague", lat=50.0755, lon=14.4378, country="CZ"),
    City(name="Istanbul", lat=41.0082, lon=28.9784, country="TR"),
    City(name="Moscow", lat=55.7558, lon=37.6173, country="RU"),
    City(name="Mexico City", lat=19.4326, lon=-99.1332, country="MX"),
    City(name="Buenos Aires", lat=-34.6037, lon=-58.3816, country="AR"),
    City(name="São Paulo", lat=-23.5505, lon=-46.6333, country="BR"),
    City(name="Bogotá", lat=4.711, lon=-74.0721, country="CO"),
    City(name="Lima", lat=-12.0464, lon=-77.0428, country="PE"),
]


def search_cities(query: str | None, limit: int = 10) -> List[City]:
    """이름으로 도시를 찾습니다. / Case-insensitive substring search."""

    if not query:
        return []
    needle = query.lower()
    return [city for city in CITIES if needle in city.name.lower()][:limit]
