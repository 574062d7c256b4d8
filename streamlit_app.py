# frontend/streamlit_app.py
import streamlit as st
import requests
import pandas as pd

API_BASE = st.secrets.get("api_base", "http://localhost:8000")

SPECIES_LABELS = {"both": "Dogs & Cats", "dog": "Dogs", "cat": "Cats"}
GUIDELINE_COLUMNS = ["min_weight_kg", "max_weight_kg", "dosage_mg_per_kg", "frequency_per_day", "duration_days", "notes"]
DEFAULT_GUIDELINE = {"min_weight_kg": 1.0, "max_weight_kg": 10.0, "dosage_mg_per_kg": 1.0,
                     "frequency_per_day": 1, "duration_days": 7, "notes": ""}

st.set_page_config(page_title="Veterinary Medication Calculator", layout="wide")
st.title("Veterinary Medication Calculator")
st.caption("Calculate accurate medication dosages for dogs and cats")


def load_medications(species):
    params = {} if species == "both" else {"species": species}
    try:
        r = requests.get(f"{API_BASE}/medications", params=params, timeout=30)
        if r.status_code != 200:
            st.error("Error loading medications: " + r.text)
            return []
        return r.json()
    except Exception as e:
        st.error("Could not contact backend: " + str(e))
        return []


def load_favorites(user_id):
    if not user_id:
        return set()
    try:
        r = requests.get(f"{API_BASE}/favorites/{user_id}", timeout=30)
        if r.status_code == 200:
            return set(r.json().get("medication_ids", []))
        st.error("Error loading favorites: " + r.text)
    except Exception as e:
        st.error("Could not contact backend: " + str(e))
    return set()


def toggle_favorite(user_id, medication_id):
    try:
        r = requests.post(f"{API_BASE}/favorites/{user_id}/{medication_id}", timeout=30)
        if r.status_code != 200:
            st.error("Error toggling favorite: " + r.text)
    except Exception as e:
        st.error("Could not contact backend: " + str(e))


def medication_card(med, favorites, user_id, key_prefix):
    selected = st.session_state.get("selected_medication_id") == med["id"]
    with st.container(border=True):
        left, right = st.columns([4, 1])
        with left:
            title = f"**{med['name']}**" + (" ✔" if selected else "")
            st.markdown(title)
            if med.get("generic_name"):
                st.caption(med["generic_name"])
            st.markdown(f"`{med.get('category') or ''}` · {SPECIES_LABELS.get(med['species'], med['species'])}")
            if st.button("Select", key=f"{key_prefix}-select-{med['id']}"):
                st.session_state["selected_medication_id"] = med["id"]
                st.session_state.pop("last_result", None)
                st.rerun()
        with right:
            if user_id:
                heart = "❤️" if med["id"] in favorites else "🤍"
                if st.button(heart, key=f"{key_prefix}-fav-{med['id']}"):
                    toggle_favorite(user_id, med["id"])
                    st.rerun()


# Sidebar: user + species filter
with st.sidebar:
    st.header("Account")
    user_id = st.text_input("User id (for favorites)", key="user").strip()
    if not user_id:
        st.info("Enter a user id to use favorites.")

    st.markdown("---")
    species = st.selectbox("Species", ["both", "dog", "cat"], format_func=lambda s: {"both": "Both", "dog": "Dogs", "cat": "Cats"}[s], key="species")

medications = load_medications(species)
favorites = load_favorites(user_id)
by_id = {m["id"]: m for m in medications}

col1, col2 = st.columns([1, 1])

with col1:
    st.subheader("Medications")
    tab_all, tab_fav = st.tabs(["All Medications", f"Favorites ({len(favorites)})"])
    with tab_all:
        if not medications:
            st.write("No medications available.")
        for med in medications:
            medication_card(med, favorites, user_id, "all")
    with tab_fav:
        fav_meds = [m for m in medications if m["id"] in favorites]
        if not user_id:
            st.info("Enter a user id in the sidebar to use favorites.")
        elif not fav_meds:
            st.write("No favorite medications yet. Add some by clicking the heart icon!")
        for med in fav_meds:
            medication_card(med, favorites, user_id, "fav")

    # adding medications needs a user, as favorites do
    if user_id:
        st.markdown("---")
        with st.expander("Add New Medication"):
            with st.form("add_medication", clear_on_submit=False):
                c1, c2 = st.columns(2)
                name = c1.text_input("Medication Name *", placeholder="e.g., Rimadyl")
                generic_name = c2.text_input("Generic Name", placeholder="e.g., Carprofen")
                c3, c4 = st.columns(2)
                new_species = c3.selectbox("Species *", ["both", "dog", "cat"], format_func=lambda s: SPECIES_LABELS[s])
                category = c4.text_input("Category *", placeholder="e.g., NSAID, Antibiotic")
                description = st.text_area("Description", placeholder="Brief description of the medication")
                st.markdown("**Dosage Guidelines**")
                guidelines_df = st.data_editor(
                    pd.DataFrame([DEFAULT_GUIDELINE], columns=GUIDELINE_COLUMNS),
                    num_rows="dynamic",
                    key="guidelines_editor",
                )
                submitted = st.form_submit_button("Add Medication")

            if submitted:
                rows = []
                for row in guidelines_df.to_dict(orient="records"):
                    if pd.isna(row.get("min_weight_kg")) and pd.isna(row.get("max_weight_kg")):
                        continue
                    rows.append({
                        k: (None if (not isinstance(v, str) and pd.isna(v)) else v) for k, v in row.items()
                    })
                payload = {
                    "name": name,
                    "generic_name": generic_name or None,
                    "species": new_species,
                    "category": category,
                    "description": description or None,
                    "guidelines": rows,
                }
                try:
                    r = requests.post(f"{API_BASE}/medications", json=payload, timeout=30)
                    if r.status_code == 201:
                        st.success("Medication added successfully!")
                        st.rerun()
                    else:
                        st.error("Error adding medication: " + r.text)
                except Exception as e:
                    st.error("Error adding medication: " + str(e))

with col2:
    st.subheader("Dosage Calculator")
    st.caption("Enter animal weight to calculate precise medication dosage")
    selected = by_id.get(st.session_state.get("selected_medication_id"))

    w1, w2 = st.columns([3, 1])
    weight = w1.text_input("Animal Weight", placeholder="Enter weight", key="weight")
    unit = w2.selectbox("Unit", ["kg", "lbs"], key="weight_unit")

    # a result only stays on screen for the inputs it was computed from
    inputs = (selected["id"] if selected else None, weight.strip(), unit)
    if selected is None or st.session_state.get("last_inputs") != inputs:
        st.session_state.pop("last_result", None)
        st.session_state.pop("last_inputs", None)

    if st.button("Calculate Dosage", disabled=not (selected and weight.strip()),
                 use_container_width=True, key="calculate"):
        try:
            r = requests.post(f"{API_BASE}/calculate",
                              json={"medication_id": selected["id"], "weight": weight, "unit": unit},
                              timeout=30)
            if r.status_code != 200:
                st.error("Calculation failed: " + r.text)
            else:
                st.session_state["last_result"] = r.json()
                st.session_state["last_inputs"] = inputs
        except Exception as e:
            st.error("Could not contact backend: " + str(e))

    if selected:
        st.info(f"**Selected Medication:** {selected['name']}" +
                (f"\n\n{selected['description']}" if selected.get("description") else ""))

    result = st.session_state.get("last_result")
    if result:
        if result["status"] == "ok":
            plan = result["plan"]
            lines = [
                f"**Total Dosage:** {plan['total_dose_mg']:.2f} mg",
                f"**Frequency:** {plan['frequency_per_day']} time(s) per day",
            ]
            if plan.get("duration_days"):
                lines.append(f"**Duration:** {plan['duration_days']} days")
            if plan.get("notes"):
                lines.append(f"**Notes:** {plan['notes']}")
            st.success("\n\n".join(lines))
        elif result["status"] == "no_match":
            st.warning(result.get("message"))
        else:
            st.error(result.get("message") or "Invalid weight.")

    with st.expander("How to use this calculator"):
        st.markdown(
            "1. **Select species** in the sidebar to filter medications for dogs, cats, or both.\n"
            "2. **Pick a medication** from the list.\n"
            "3. **Enter the weight** in kg or lbs and click *Calculate Dosage*.\n\n"
            "The calculator finds the first dosage guideline whose weight range covers the patient "
            "and multiplies the weight in kg by the mg/kg rate.\n\n"
            "Enter a user id to keep favorites; medications you add are available to all users."
        )
        st.warning(
            "This tool is for licensed veterinary professionals only. Always verify dosages against "
            "current veterinary literature and consider individual patient factors."
        )
