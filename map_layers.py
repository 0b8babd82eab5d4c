"""Folium map for one view snapshot: trend path, sightings and vessel presence."""

from __future__ import annotations

import math

import folium
from folium.plugins import HeatMap

from time_window import format_date

TREND_COLOR = '#00ffff'
SIGHTING_COLOR = '#ffa500'
VESSEL_COLOR = '#dc3545'
FILL_OPACITY = 180 / 255

# Cap so a vessel that sat in one cell all day does not swamp the map
MAX_VESSEL_RADIUS = 20


def vessel_radius(presence_hours):
    """Marker radius in pixels for a presence weight."""
    return min(MAX_VESSEL_RADIUS, 3 + math.sqrt(max(presence_hours, 0.0)) * 2)


def heat_weights(vessels):
    """[lat, lon, weight] rows with presence hours scaled to the window maximum.

    Leaflet.heat saturates at intensity 1.0, so raw hours would flatten every
    cell above one hour into the same colour.
    """
    peak = max((v.presence_hours for v in vessels), default=0.0)
    if peak <= 0:
        return [[v.latitude, v.longitude, 0.0] for v in vessels]
    return [[v.latitude, v.longitude, v.presence_hours / peak] for v in vessels]


def _finite(record):
    return math.isfinite(record.latitude) and math.isfinite(record.longitude)


def _add_point_layer(m, records, name, color, radius, tooltip=None):
    group = folium.FeatureGroup(name=name, show=True)
    for record in records:
        # NaN positions cannot be drawn by Leaflet
        if not _finite(record):
            continue
        folium.CircleMarker(
            location=[record.latitude, record.longitude],
            radius=radius,
            color=color,
            weight=1,
            fill=True,
            fillColor=color,
            fillOpacity=FILL_OPACITY,
            tooltip=tooltip,
        ).add_to(group)
    group.add_to(m)
    return group


def build_map(snapshot, config):
    """
    Build the Folium map for a snapshot

    Args:
        snapshot: ViewSnapshot from MapSession.snapshot(), or None while loading
        config: MapConfig with the initial view and tile settings

    Returns:
        m: folium.Map with one feature group per record class
    """
    m = folium.Map(
        location=[config.center_lat, config.center_lon],
        zoom_start=config.zoom_start,
        tiles=config.tiles,
    )
    if snapshot is None:
        return m

    layers = snapshot.layers

    # Trend path sits underneath the observed sightings
    _add_point_layer(m, layers.trends, "Predicted Trend", TREND_COLOR, radius=4)
    _add_point_layer(m, layers.sightings, "Turtle Sightings", SIGHTING_COLOR, radius=3,
                     tooltip="Turtle sighting")

    vessel_group = folium.FeatureGroup(name="Vessel Presence", show=True)
    for vessel in layers.vessels:
        folium.CircleMarker(
            location=[vessel.latitude, vessel.longitude],
            radius=vessel_radius(vessel.presence_hours),
            color=VESSEL_COLOR,
            weight=1,
            fill=True,
            fillColor=VESSEL_COLOR,
            fillOpacity=0.4,
            tooltip=(f"{vessel.vessel_id or 'Vessel'}<br>{format_date(vessel.date)}"
                     f"<br>{vessel.presence_hours:.1f} h"),
        ).add_to(vessel_group)
    vessel_group.add_to(m)

    heat_data = heat_weights(layers.vessels)
    if heat_data:
        heat_group = folium.FeatureGroup(name="Vessel Heatmap", show=True)
        HeatMap(heat_data, radius=15, blur=20, min_opacity=0.3).add_to(heat_group)
        heat_group.add_to(m)

    folium.LayerControl(position='topleft', collapsed=True).add_to(m)
    return m
