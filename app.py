import html
import logging
from datetime import date, timedelta

import streamlit as st

from analyze import AvailabilityGrid, aggregate, color_map, get_full_coverage_ranges, session_mode
from config import settings
from schemas import DAYS_OF_WEEK, HOURS, PARTICIPANT_ROLES, ROLE_COLORS, AggregationCell, Participant
from storage import ParticipantStore, PreferenceStore
from timezones import COMMON_TIMEZONES, format_date, format_hour, format_timezone, uses_12_hour_clock

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Court Scheduler", page_icon="⚖️", layout="wide")

store = ParticipantStore(settings.storage_path)
preferences = PreferenceStore(settings.preferences_path)


# =============================================================================
# 그리드 HTML 생성 함수
# =============================================================================
def render_cell(cell: AggregationCell, colors: dict[str, str], names: dict[str, str], label: str) -> str:
    """셀 하나를 참가자 색상 막대로 그립니다."""
    if cell.count == 0:
        return '<td style="background:#21262d;border:1px solid #30363d;height:28px"></td>'

    width = 100 / cell.count
    segments = "".join(
        f'<div style="background:{colors[pid]};width:{width}%"></div>'
        for pid in cell.participant_ids
    )
    text = "all" if cell.is_full_coverage else str(cell.count)
    tooltip = html.escape(
        f"{label}\n{cell.count}/{cell.total} available\n" + ", ".join(names[pid] for pid in cell.participant_ids)
    )
    return (
        f'<td title="{tooltip}" style="position:relative;padding:0;border:1px solid #30363d;height:28px">'
        f'<div style="position:absolute;inset:0;display:flex">{segments}</div>'
        f'<div style="position:relative;text-align:center;font-size:12px;color:white">{text}</div>'
        "</td>"
    )


def render_grid(grid: AvailabilityGrid, participants: list[Participant], twelve_hour: bool) -> str:
    colors = color_map(participants, settings.palette)
    names = {p.id: p.name for p in participants}

    if grid.mode == "specific":
        headers = [format_date(key) for key in grid.axis]
    else:
        headers = list(grid.axis)

    lines = ['<table style="width:100%;border-collapse:collapse;table-layout:fixed">', "<tr><th></th>"]
    lines += [f'<th style="font-size:12px">{html.escape(h)}</th>' for h in headers]
    lines.append("</tr>")

    for hour, cells in grid.rows():
        hour_label = format_hour(hour, twelve_hour)
        lines.append(f'<tr><td style="font-size:12px;text-align:right;padding-right:6px">{hour_label}</td>')
        for header, cell in zip(headers, cells):
            lines.append(render_cell(cell, colors, names, f"{header} {hour_label}"))
        lines.append("</tr>")

    lines.append("</table>")
    return "\n".join(lines)


def generate_text_output(ranges: dict[str, list[str]], observer_zone: str, mode: str) -> str:
    """전원 가능한 시간을 보기 좋은 텍스트로 변환합니다."""
    lines = [f"⚖️ 전원 가능 시간 ({format_timezone(observer_zone)})", "=" * 40, ""]

    for key, times in ranges.items():
        lines.append(f"📅 {format_date(key) if mode == 'specific' else key}")
        for t in times:
            lines.append(f"   {t}")
        lines.append("")

    return "\n".join(lines)


# =============================================================================
# 상태 초기화
# =============================================================================
if "participants" not in st.session_state:
    st.session_state.participants = store.load()

if "last_timezone" not in st.session_state:
    st.session_state.last_timezone = preferences.load_last_timezone() or settings.default_timezone

if "form_key" not in st.session_state:
    st.session_state.form_key = 0

participants: list[Participant] = st.session_state.participants
timezone_options = list(COMMON_TIMEZONES)
for zone in (settings.default_timezone, st.session_state.last_timezone):
    if zone not in timezone_options:
        timezone_options.append(zone)


st.title("⚖️ Court Scheduler")

# =============================================================================
# 상단: 보는 사람 타임존, 기준 주
# =============================================================================
col1, col2 = st.columns([3, 1])
with col1:
    observer_zone = st.selectbox(
        "🌐 내 타임존",
        options=timezone_options,
        index=timezone_options.index(settings.default_timezone),
        format_func=format_timezone,
    )
with col2:
    reference_date = st.date_input("📆 기준 주 (이 날짜부터 7일)", value=date.today())

mode = session_mode(participants)

# =============================================================================
# 참가자 추가
# =============================================================================
with st.expander("➕ 참가자 추가", expanded=not participants):
    if participants:
        st.caption(f"입력 방식: **{mode}** (첫 번째 참가자 기준으로 고정)")
        new_type = mode
    else:
        new_type = st.radio("입력 방식", options=["weekly", "specific"], horizontal=True)

    form_key = st.session_state.form_key
    selected_dates: list[str] = []
    if new_type == "specific":
        # 날짜마다 시간 선택 칸이 생겨야 해서 폼 밖에 둔다
        date_options = [(reference_date + timedelta(days=i)).isoformat() for i in range(60)]
        selected_dates = sorted(st.multiselect(
            "날짜 선택",
            options=date_options,
            format_func=format_date,
            key=f"selected_dates_{form_key}",
        ))

    with st.form(key=f"participant_form_{form_key}"):
        name = st.text_input("이름")
        role = st.selectbox("역할", options=PARTICIPANT_ROLES, index=PARTICIPANT_ROLES.index("Witness"))
        zone = st.selectbox(
            "타임존",
            options=timezone_options,
            index=timezone_options.index(st.session_state.last_timezone),
            format_func=format_timezone,
        )

        availability: dict[str, list[int]] = {}
        if new_type == "weekly":
            for day in DAYS_OF_WEEK:
                availability[day] = st.multiselect(day, options=list(HOURS), format_func=format_hour)
        elif not selected_dates:
            st.caption("위에서 날짜를 먼저 골라주세요.")
        else:
            for key in selected_dates:
                availability[key] = st.multiselect(format_date(key), options=list(HOURS), format_func=format_hour)
            copy_first = st.checkbox(f"{format_date(selected_dates[0])}의 시간을 모든 날짜에 적용")
            if copy_first:
                first_hours = availability[selected_dates[0]]
                availability = {key: list(first_hours) for key in selected_dates}

        submitted = st.form_submit_button("저장", type="primary")

    if submitted:
        availability = {key: hours for key, hours in availability.items() if hours}
        if not name.strip():
            st.warning("이름을 입력해주세요!")
        elif not availability:
            st.warning("가능한 시간을 하나 이상 선택해주세요!")
        else:
            participants.append(Participant(
                name=name.strip(),
                role=role,
                timezone=zone,
                availability_type=new_type,
                availability=availability,
            ))
            store.save(participants)
            st.session_state.last_timezone = zone
            preferences.save_last_timezone(zone)
            st.session_state.form_key += 1
            logger.info("Added participant %s (%s)", name.strip(), zone)
            st.rerun()

# =============================================================================
# 메인: 참가자 목록 + 그리드
# =============================================================================
if participants:
    colors = color_map(participants, settings.palette)
    left, right = st.columns([1, 5])

    with left:
        st.subheader(f"👥 참가자 {len(participants)}명")
        st.caption(f"총 {sum(p.available_hours for p in participants)}시간")

        for i, p in enumerate(participants):
            st.markdown(
                f'<span style="color:{colors[p.id]}">■</span> **{html.escape(p.name)}** '
                f'<span style="color:{ROLE_COLORS[p.role]}">{p.role}</span><br>'
                f"📍 {format_timezone(p.timezone)}<br>"
                f"🕐 {p.available_hours}시간 · {format_date(p.created_at.isoformat())} 추가",
                unsafe_allow_html=True,
            )
            if st.button("🗑️ 삭제", key=f"delete_{p.id}_{i}"):
                participants.pop(i)
                store.save(participants)
                st.rerun()

        if st.button("전체 삭제", type="secondary"):
            participants.clear()
            store.clear()
            st.rerun()

    with right:
        grid = aggregate(participants, observer_zone, mode, reference_date)
        st.subheader("🗓️ Availability Overview")
        st.markdown(render_grid(grid, participants, uses_12_hour_clock(observer_zone)), unsafe_allow_html=True)
        st.caption(f"모든 시간은 {format_timezone(observer_zone)} 기준")

        ranges = get_full_coverage_ranges(grid)
        if ranges:
            st.success(f"✅ {len(participants)}명 전원 가능한 시간대")
            st.code(generate_text_output(ranges, observer_zone, grid.mode), language=None)
        else:
            st.warning("😢 전원 가능한 시간이 없습니다!")

        if grid.issues:
            with st.expander(f"⚠️ 반영되지 않았거나 변환되지 않은 항목 {len(grid.issues)}개"):
                names = {p.id: p.name for p in participants}
                for issue in grid.issues:
                    st.write(f"- {names.get(issue.participant_id, issue.participant_id)}: {issue.key} {issue.hour!r} ({issue.kind}) {issue.message}")

else:
    st.info("참가자를 추가하면 가능한 시간 그리드가 보입니다~")
