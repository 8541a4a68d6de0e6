# streamlit_app.py
import requests
import pandas as pd
import streamlit as st

from medcart.errors import InvalidTransition, PrepDataError
from medcart.schemas import Phase, PrepMethod
from medcart.services import input_mapper
from medcart.services.cart import CartController
from medcart.services.labels import item_count_label, item_kind, label_sections, packaging_type

API_BASE = st.secrets.get("api_base", "http://localhost:8000")

KIND_ICONS = {"pill": "💊", "syringe": "💉", "droplets": "💧", "stethoscope": "🩺", "scissors": "✂️"}

st.set_page_config(page_title="Medication Cart Simulator", layout="wide")
st.title("Medication Cart Simulator")
st.caption("Interactive learning tool for nursing students")


def load_catalog():
    drawers = requests.get(f"{API_BASE}/api/drawers", timeout=10)
    drawers.raise_for_status()
    meds = requests.get(f"{API_BASE}/api/medications", timeout=10)
    meds.raise_for_status()
    return drawers.json(), meds.json()


if "controller" not in st.session_state:
    try:
        drawers, meds = load_catalog()
        st.session_state["controller"] = CartController(drawers, meds)
    except Exception as e:
        st.error("Could not load cart data from backend: " + str(e))
        st.stop()

ctl: CartController = st.session_state["controller"]

with st.sidebar:
    st.header("Cart")
    if st.button("Reload catalog"):
        del st.session_state["controller"]
        st.rerun()
    if not ctl.drawers:
        st.info("No medication cart data available.")
    for drawer in ctl.sorted_drawers():
        is_open = ctl.cart.open_drawer_id == drawer["id"]
        label = f"{'▾' if is_open else '▸'} {drawer['position']}. {drawer['label']}"
        if drawer.get("size") == "large":
            label += "  (large)"
        if st.button(label, key=f"drawer-{drawer['id']}", use_container_width=True):
            ctl.toggle_drawer(drawer["id"])
            st.rerun()

col1, col2 = st.columns([1, 1.2])

with col1:
    open_id = ctl.cart.open_drawer_id
    if not open_id:
        st.write("Click on a drawer to view its contents")
    else:
        drawer = ctl.drawer(open_id)
        items = ctl.drawer_items(open_id)
        count = len(items["medications"]) + len(items["tools"])
        st.subheader(drawer["label"])
        st.caption(item_count_label(count))
        if count == 0:
            st.info("This drawer is empty")

        if items["medications"]:
            st.markdown("**Medications**")
            df = pd.DataFrame([{
                "": KIND_ICONS[item_kind(m["form"], m["itemType"]).value],
                "name": m["name"],
                "dosage": m["dosage"],
                "form": m["form"],
                "route": m["route"],
                "controlled": m.get("scheduleClass") or "Controlled" if m.get("controlledSubstance") else "",
            } for m in items["medications"]])
            st.dataframe(df, hide_index=True, use_container_width=True)
            for m in items["medications"]:
                if st.button(f"View label: {m['name']}", key=f"label-{m['id']}"):
                    ctl.view_label(m["id"])
                    st.rerun()

        if items["tools"]:
            st.markdown("**Tools & Supplies**")
            for t in items["tools"]:
                icon = KIND_ICONS[item_kind(t["form"], t["itemType"]).value]
                if st.button(f"{icon} {t['name']} · {t['dosage']}", key=f"label-{t['id']}"):
                    ctl.view_label(t["id"])
                    st.rerun()

with col2:
    selected = ctl.label.selected
    if selected:
        st.subheader(selected["name"])
        st.caption(f"{selected['dosage']} · {selected['form']} · {selected['route']} "
                   f"· packaging: {packaging_type(selected['form'], selected['route']).value}")
        if selected.get("controlledSubstance"):
            st.warning(f"CONTROLLED SUBSTANCE {selected.get('scheduleClass') or ''}")
        for title, text in label_sections(selected):
            st.markdown(f"**{title}**")
            st.write(text)
        c1, c2 = st.columns(2)
        if ctl.label.can_prepare and c1.button("Prepare Dose", type="primary"):
            try:
                ctl.prepare_dose(selected)
            except PrepDataError as e:
                st.error(f"Dose preparation unavailable: {e}")
            else:
                st.rerun()
        if c2.button("Close label"):
            ctl.label.close()
            st.rerun()

    prep = ctl.preparation
    if prep is not None and not prep.closed:
        st.markdown("---")
        st.markdown("**DOSE PREPARATION**")
        st.subheader(prep.name)
        st.caption(f"Ordered: {prep.dosage} · {prep.route}")
        try:
            if prep.phase is Phase.CHOOSING_METHOD:
                st.write("Choose your delivery method:")
                b1, b2 = st.columns(2)
                if b1.button("💉 Syringe — for liquids & injectables", use_container_width=True):
                    prep.select_method(PrepMethod.SYRINGE)
                    st.rerun()
                if b2.button("🥛 Medication Cup — for tablets & capsules", use_container_width=True):
                    prep.select_method(PrepMethod.CUP)
                    st.rerun()

            elif prep.phase is Phase.FILLING:
                if st.button("← Back"):
                    prep.back()
                    st.rerun()
                if prep.chosen_method is PrepMethod.SYRINGE:
                    st.write(f"Draw up the correct dose of **{prep.dosage}**")
                    ticks = input_mapper.tick_marks(prep.max_amount, prep.step_size)
                    value = st.select_slider(f"{prep.unit} drawn", options=ticks, value=prep.current_amount)
                    st.caption("Scale: " + " · ".join(f"{v:g}" for v in input_mapper.tick_labels(prep.max_amount, prep.step_size)))
                    if value != prep.current_amount:
                        prep.set_amount(value)
                        st.rerun()
                    st.metric(f"{prep.unit} drawn", f"{prep.current_amount:.1f}")
                else:
                    st.write(f"Add the correct number of tablets for **{prep.dosage}**")
                    noun = "tablet" if prep.current_amount == 1 else "tablets"
                    st.metric(noun, int(prep.current_amount))
                    st.write("🔘 " * int(prep.current_amount))
                m1, m2 = st.columns(2)
                if m1.button("−", disabled=prep.current_amount <= 0):
                    prep.adjust_amount(-1)
                    st.rerun()
                if m2.button("+", disabled=prep.current_amount >= prep.max_amount):
                    prep.adjust_amount(1)
                    st.rerun()
                if st.button("Check My Dose", type="primary", disabled=not prep.can_submit):
                    prep.submit()
                    st.rerun()

            elif prep.phase is Phase.SHOWING_RESULT:
                verdict = prep.verdict
                if verdict.overall_correct:
                    st.success(verdict.title)
                else:
                    st.error(verdict.title)
                for message in verdict.messages:
                    st.write(message)
                r1, r2 = st.columns(2)
                if r1.button("↻ Try Again"):
                    prep.reset()
                    st.rerun()
                if r2.button("Done"):
                    ctl.close_preparation()
                    st.rerun()
        except InvalidTransition as e:
            # stale button press after a rerun; the session is unchanged
            st.toast(str(e))
