import logging
from typing import Dict, List, Optional

import folium
import pandas as pd
from tabulate import tabulate

from .. import config
from ..exceptions import DirectionsError
from ..models.stop import Route, Stop

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ["Step", "From", "To", "Distance", "Duration"]


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{meters:.0f} m"
    return f"{meters / 1000:.1f} km"


def format_duration(seconds: float) -> str:
    minutes = max(1, round(seconds / 60))
    hours, minutes = divmod(minutes, 60)
    if not hours:
        return f"{minutes} min" if minutes == 1 else f"{minutes} mins"
    hour_text = "1 hour" if hours == 1 else f"{hours} hours"
    return f"{hour_text} {minutes} mins" if minutes else hour_text


class MapVisualizer:
    """Renders a sequenced route: labelled markers, driving directions and a steps table."""

    def __init__(self, route: Route, ors_client):
        self.route = route
        self.ors_client = ors_client
        self.directions: Optional[Dict] = None

    def create_base_map(self) -> folium.Map:
        """Create base map centered on the route, or the default center when empty"""
        stops = list(self.route)
        if not stops:
            return folium.Map(location=list(config.DEFAULT_CENTER), zoom_start=config.DEFAULT_ZOOM)

        center_lat = sum(stop.coordinate.lat for stop in stops) / len(stops)
        center_lng = sum(stop.coordinate.lng for stop in stops) / len(stops)
        return folium.Map(location=[center_lat, center_lng], zoom_start=12)

    def fetch_directions(self) -> Optional[Dict]:
        """Request directions from the first to the last stop through the interior stops"""
        if len(self.route) < 2:
            return None
        self.directions = self.ors_client.get_route_details(self.route.coordinates())
        return self.directions

    def generate_tooltip(self, label: str, stop: Stop) -> str:
        return f"""
            <b>{label}</b><br>
            {stop.display_name}<br>
            Coordinates: {stop.coordinate}
        """

    def add_markers(self, map_obj: folium.Map):
        labels = self.route.labels()
        for label, stop in zip(labels, self.route):
            color = "red" if label == "Start" else "darkblue" if label == "End" else "green"
            folium.Marker(
                location=[stop.coordinate.lat, stop.coordinate.lng],
                icon=folium.Icon(color=color, icon="info-sign"),
                tooltip=self.generate_tooltip(label, stop),
            ).add_to(map_obj)

    def draw_route(self, map_obj: folium.Map):
        if not self.directions or not self.directions.get("features"):
            return
        folium.GeoJson(
            self.directions,
            style_function=lambda x: {
                'color': 'blue',
                'weight': 3,
                'opacity': 0.7
            }
        ).add_to(map_obj)

    def directions_table(self) -> pd.DataFrame:
        """One row per leg: Step, From, To, Distance, Duration"""
        if not self.directions:
            return pd.DataFrame(columns=TABLE_COLUMNS)

        features = self.directions.get("features") or []
        if not features:
            logger.warning("Directions response has no route features")
            return pd.DataFrame(columns=TABLE_COLUMNS)

        segments = features[0].get("properties", {}).get("segments", [])
        stops = list(self.route)
        if len(segments) != len(stops) - 1:
            logger.warning(f"Directions returned {len(segments)} legs for {len(stops)} stops")

        rows: List[Dict] = []
        for index, (segment, start, end) in enumerate(zip(segments, stops, stops[1:]), 1):
            rows.append({
                "Step": index,
                "From": start.display_name,
                "To": end.display_name,
                "Distance": format_distance(segment.get("distance", 0)),
                "Duration": format_duration(segment.get("duration", 0)),
            })
        return pd.DataFrame(rows, columns=TABLE_COLUMNS)

    def directions_html(self, table: pd.DataFrame) -> str:
        html = "<h3>Directions:</h3>"
        html += table.to_html(index=False, table_id="directionsTable")
        return html

    def print_directions(self, table: pd.DataFrame):
        if table.empty:
            return
        print("\nDirections:")
        print(tabulate(table.values.tolist(), headers=TABLE_COLUMNS, tablefmt="grid"))

    def build_map(self) -> folium.Map:
        route_map = self.create_base_map()
        self.add_markers(route_map)

        try:
            self.fetch_directions()
        except DirectionsError as e:
            logger.error(f"Error fetching directions: {e}")
            self.directions = None

        self.draw_route(route_map)
        table = self.directions_table()
        if not table.empty:
            route_map.get_root().html.add_child(folium.Element(self.directions_html(table)))
            self.print_directions(table)
        return route_map

    def generate_map(self, output_file: str = config.OUTPUT_MAP) -> folium.Map:
        """Generate and save the route map"""
        try:
            route_map = self.build_map()
            route_map.save(output_file)
            logger.info(f"Generated map: {output_file}")
            return route_map
        except Exception as e:
            logger.error(f"Failed to generate map: {e}")
            raise
