"""
Streamlit console for the Marketplace Command Agent.

Sellers type a command, read the agent's reply and track the resulting
tasks on a board grouped by status.
"""

import streamlit as st
from pathlib import Path
from typing import Any, Dict

# Add the project root to the path to import our modules
import sys
sys.path.append(str(Path(__file__).parent.parent.parent))

from config.settings import initialize_settings
from marketplace_agent.agents import CommandAgent
from marketplace_agent.models import Marketplace, Priority, TaskStatus
from marketplace_agent.store import InMemoryTaskStore
from marketplace_agent.utils import smart_capitalize

STATUS_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.BLOCKED: "Blocked",
    TaskStatus.COMPLETED: "Completed",
}

MARKETPLACE_LABELS = {
    Marketplace.GENERIC: "General",
    Marketplace.AMAZON: "Amazon",
    Marketplace.FLIPKART: "Flipkart",
    Marketplace.MEESHO: "Meesho",
    Marketplace.MYNTRA: "Myntra",
}


def initialize_app():
    """Initialize the Streamlit application."""
    if 'settings' not in st.session_state:
        config_path = Path(__file__).parent.parent.parent / "config" / "default.yaml"
        st.session_state.settings = initialize_settings(str(config_path))

    st.set_page_config(
        page_title=st.session_state.settings.ui.page_title,
        page_icon="🛒",
        layout="wide"
    )

    if 'task_store' not in st.session_state:
        st.session_state.task_store = InMemoryTaskStore()

    if 'agent' not in st.session_state:
        st.session_state.agent = CommandAgent(
            st.session_state.settings.to_dict(),
            task_store=st.session_state.task_store
        )

    if 'conversation' not in st.session_state:
        st.session_state.conversation = []


def create_command_console():
    """Command box plus the running conversation log."""
    st.header("🎙️ Command Console")

    with st.form("command_form", clear_on_submit=True):
        prompt = st.text_input(
            "Tell the agent what to do",
            placeholder="List a red kurti on Amazon tomorrow and upload bags on Flipkart"
        )
        submitted = st.form_submit_button("Send", type="primary")

    if submitted:
        handle_command(prompt)

    for entry in reversed(st.session_state.conversation[-10:]):
        with st.chat_message(entry['speaker']):
            st.write(entry['content'])
            if entry.get('summary'):
                st.caption(entry['summary'])


def handle_command(prompt: str):
    response = st.session_state.agent.process_command(prompt)
    if prompt and prompt.strip():
        st.session_state.conversation.append({'speaker': 'user', 'content': prompt.strip()})

    entry: Dict[str, Any] = {'speaker': 'assistant', 'content': response.message}
    if response.summary:
        entry['summary'] = response.summary
    st.session_state.conversation.append(entry)

    if response.is_error:
        st.error(response.message)


def create_task_form():
    """Manual task entry for work the agent did not pick up."""
    with st.expander("➕ Add a task manually"):
        with st.form("task_form", clear_on_submit=True):
            title = st.text_input("Title")
            col1, col2 = st.columns(2)
            with col1:
                marketplace = st.selectbox(
                    "Marketplace", list(Marketplace), format_func=MARKETPLACE_LABELS.get
                )
            with col2:
                priority = st.selectbox(
                    "Priority", list(Priority), index=1, format_func=lambda p: p.value.title()
                )
            if st.form_submit_button("Add task") and title.strip():
                st.session_state.task_store.add_task({
                    'title': smart_capitalize(title.strip()),
                    'marketplace': marketplace,
                    'priority': priority,
                })


def create_sidebar():
    """Sidebar with console preferences."""
    with st.sidebar:
        st.header("⚙️ Console")
        if st.session_state.settings.ui.speak_responses:
            st.caption("🔊 Speech output is on.")
        else:
            st.caption("🔇 Speech output is off. Set `ui.speak_responses` to turn it on.")
        st.caption(f"API route: `{st.session_state.settings.api.route}`")


def display_task_board():
    """Display tasks grouped by status with a marketplace filter."""
    st.header("📋 Marketplace Mission Board")
    store = st.session_state.task_store

    marketplace = st.selectbox(
        "Filter by marketplace", list(Marketplace), format_func=MARKETPLACE_LABELS.get
    )
    st.metric("Open tasks", store.pending_count(marketplace))

    grouped = store.group_by_status(marketplace)
    columns = st.columns(len(STATUS_LABELS))

    for column, (status, label) in zip(columns, STATUS_LABELS.items()):
        with column:
            st.subheader(f"{label} ({len(grouped[status])})")
            for task in grouped[status]:
                with st.container(border=True):
                    st.write(f"**{task.title}**")
                    st.caption(f"{MARKETPLACE_LABELS[task.marketplace]} · {task.priority.value} priority")
                    if task.due_date:
                        st.caption(f"Due {task.due_date:%d %b %Y}")
                    new_status = st.selectbox(
                        "Status",
                        list(TaskStatus),
                        index=list(TaskStatus).index(task.status),
                        format_func=STATUS_LABELS.get,
                        key=f"status-{task.id}",
                        label_visibility="collapsed"
                    )
                    if new_status != task.status:
                        store.update_task_status(task.id, new_status)
                        st.rerun()


def main():
    """Main application function."""
    initialize_app()

    st.title("🛒 Marketplace Command Agent")
    st.markdown("""
    Plan listings for Amazon, Flipkart, Meesho and Myntra, ask for catalog sheet help,
    or request a performance briefing.
    """)

    create_sidebar()
    create_command_console()
    create_task_form()
    display_task_board()


if __name__ == "__main__":
    main()
