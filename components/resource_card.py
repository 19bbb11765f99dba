"""
Resource card for the browse page.
"""
from __future__ import annotations

from typing import Any, List, Mapping

import streamlit as st

from filters.options import BOOLEAN_FLAGS


def _service_area(resource: Mapping[str, Any]) -> str:
    if resource.get("statewide"):
        return "Statewide"
    regions = [r for r in resource.get("geographicRegions") or [] if isinstance(r, str)]
    if regions:
        return ", ".join(regions)
    cities = [
        c.get("city") if isinstance(c, Mapping) else c
        for c in resource.get("geographicCities") or []
    ]
    cities = [c for c in cities if c]
    if cities:
        more = f" +{len(cities) - 5} more" if len(cities) > 5 else ""
        return ", ".join(cities[:5]) + more
    return resource.get("geographicCoverage") or ""


def _address(resource: Mapping[str, Any]) -> str:
    street = ", ".join(p for p in (resource.get("addressLine1"), resource.get("addressLine2")) if p)
    locality = " ".join(p for p in (resource.get("city"), resource.get("state"), resource.get("zipCode")) if p)
    return ", ".join(p for p in (street, locality) if p)


def _badges(resource: Mapping[str, Any]) -> List[str]:
    badges = [label for field, label in BOOLEAN_FLAGS if resource.get(field) is True]
    if resource.get("isUnavailable") is True:
        badges.append("Currently unavailable")
    return badges


def render_resource_card(resource: Mapping[str, Any]) -> None:
    """One listing in a bordered container."""
    with st.container(border=True):
        title = resource.get("name") or "Unnamed resource"
        org_type = resource.get("organizationType")
        st.markdown(f"#### {title}" + (f"  \n*{org_type}*" if org_type else ""))

        domains = resource.get("serviceDomains") or []
        if domains:
            st.caption(" · ".join(domains))

        about = resource.get("about")
        if about:
            st.write(about)

        col1, col2 = st.columns(2)
        with col1:
            address = _address(resource)
            if address:
                st.markdown(f"📍 {address}")
            area = _service_area(resource)
            if area:
                st.markdown(f"🗺️ Serves: {area}")
        with col2:
            if resource.get("contactPhone"):
                st.markdown(f"📞 {resource['contactPhone']}")
            if resource.get("contactEmail"):
                st.markdown(f"✉️ {resource['contactEmail']}")
            if resource.get("website"):
                st.markdown(f"🔗 [{resource['website']}]({resource['website']})")

        badges = _badges(resource)
        if badges:
            st.markdown(" ".join(f"`{b}`" for b in badges))
