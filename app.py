import gradio as gr

from schema_mapper.config import get_settings
from schema_mapper.samples import sample_choices
from schema_mapper.handlers import (
    MAPPING_HEADERS,
    clear_mappings_handler,
    export_mappings_json,
    import_mappings_handler,
    load_document_handler,
    load_sample_handler,
    load_text_handler,
    save_mapping_handler,
    search_handler,
)

# --- UI Definition ---
with gr.Blocks(title="Schema Mapper") as demo:
    gr.Markdown("# Schema Mapper")
    gr.Markdown("Load a JSON Schema, explore its fields, and map leaf fields to spreadsheet fields.")

    # State
    tree_state = gr.State()
    mappings_state = gr.State(value=[])

    with gr.Row():
        # Left Panel: Input & Tree
        with gr.Column(scale=1):
            gr.Markdown("### 1. Load Schema")
            sample_selector = gr.Dropdown(label="Sample schema", choices=sample_choices(), value=None)
            load_sample_btn = gr.Button("Load Sample")
            file_input = gr.File(label="Upload JSON Schema or JSON document", file_types=[".json"])
            schema_text = gr.Textbox(label="...or paste JSON", lines=6)
            load_text_btn = gr.Button("Visualize")
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Tree")
            tree_view = gr.JSON(label="Schema Tree")

            gr.Markdown("### Search")
            search_box = gr.Textbox(label="Search fields", placeholder="name, description or rule")
            search_results = gr.Dataframe(
                headers=["Path", "Name", "Snippet"],
                datatype=["str", "str", "str"],
                col_count=(3, "fixed"),
                interactive=False,
                label="Results",
            )

        # Right Panel: Mapping
        with gr.Column(scale=1):
            gr.Markdown("### 3. Map a Field")
            target_selector = gr.Dropdown(label="Target leaf", choices=[], interactive=True)
            with gr.Row():
                field_name = gr.Textbox(label="Field name")
                field_type = gr.Textbox(label="Field type")
            with gr.Row():
                field_essence = gr.Textbox(label="Field essence")
                field_dgh = gr.Textbox(label="DGH")
                field_always = gr.Textbox(label="Always returned")
            mapping_details = gr.Textbox(label="Mapping details", lines=2)
            mapping_outputs = gr.Textbox(label="Applies to outputs (optional)")
            confirm_overwrite = gr.Checkbox(label="Confirm overwrite of an existing mapping", value=False)
            save_btn = gr.Button("Save Mapping", variant="primary")

            gr.Markdown("### 4. Mappings")
            import_file = gr.File(label="Import mapping records (JSON)", file_types=[".json"])
            clear_btn = gr.Button("Clear All Mappings", variant="stop")
            mappings_table = gr.Dataframe(
                headers=MAPPING_HEADERS,
                datatype=["str"] * len(MAPPING_HEADERS),
                col_count=(len(MAPPING_HEADERS), "fixed"),
                interactive=False,
                label="Saved Mappings",
            )
            records_btn = gr.Button("Show Mapping Records")
            records_view = gr.Code(label="Mapping Records", language="json")

            gr.Markdown("### Unmapped Required Fields")
            unmapped_table = gr.Dataframe(
                headers=["Path", "State"],
                datatype=["str", "str"],
                col_count=(2, "fixed"),
                interactive=False,
                label="Required leaves without a mapping",
            )

    load_outputs = [tree_state, tree_view, target_selector, unmapped_table, status_msg]
    mapping_outputs_list = [tree_state, mappings_state, tree_view, unmapped_table, mappings_table, status_msg]

    file_input.upload(
        fn=load_document_handler,
        inputs=[file_input, mappings_state],
        outputs=load_outputs,
    )

    load_sample_btn.click(
        fn=load_sample_handler,
        inputs=[sample_selector, mappings_state],
        outputs=load_outputs,
    )

    load_text_btn.click(
        fn=load_text_handler,
        inputs=[schema_text, mappings_state],
        outputs=load_outputs,
    )

    search_box.change(
        fn=search_handler,
        inputs=[tree_state, search_box],
        outputs=[search_results],
    )

    save_btn.click(
        fn=save_mapping_handler,
        inputs=[
            tree_state,
            mappings_state,
            target_selector,
            field_name,
            field_type,
            field_essence,
            field_dgh,
            field_always,
            mapping_details,
            mapping_outputs,
            confirm_overwrite,
        ],
        outputs=mapping_outputs_list,
    )

    import_file.upload(
        fn=import_mappings_handler,
        inputs=[import_file, tree_state, mappings_state],
        outputs=mapping_outputs_list,
    )

    clear_btn.click(
        fn=clear_mappings_handler,
        inputs=[tree_state, mappings_state],
        outputs=mapping_outputs_list,
    )

    records_btn.click(
        fn=export_mappings_json,
        inputs=[mappings_state],
        outputs=[records_view],
    )

if __name__ == "__main__":
    settings = get_settings()
    demo.launch(server_name=settings.server_name, server_port=settings.server_port)
