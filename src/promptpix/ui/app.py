"""Gradio UI for PromptPix."""

import functools
import json
import logging
import time

import gradio as gr

from promptpix.core.config import config

from .handlers import (
    copy_prompt,
    download_image,
    expire_copy_indicator,
    generate_image,
    update_prompt,
    update_quality,
    update_size,
    wait_for_copy_indicator,
)
from .models import QUALITY_CHOICES, SIZE_CHOICES, GeneratedImage, GeneratorViewState
from .state import is_copied, show_revised_prompt

logger = logging.getLogger(__name__)

PROMPT_PLACEHOLDER = (
    "A futuristic cityscape at sunset with flying cars, neon lights reflecting "
    "on wet streets, cyberpunk style..."
)


def _clipboard_js(text: str) -> str:
    """Browser-side snippet that writes *text* to the clipboard.

    It replaces the first input with the outcome of the write, so the Python
    handler receives ``False`` when the clipboard API is missing or refuses.
    """
    return (
        "async (ok, state) => {"
        f" try {{ await navigator.clipboard.writeText({json.dumps(text)}); return [true, state]; }}"
        " catch (e) { return [false, state]; }"
        " }"
    )


def _copy_button(text: str, copy_key: str, state: GeneratorViewState, view_state, clipboard_ok, now: float):
    """Create a copy button wired to the clipboard and the copied indicator."""
    label = "✓ Copied" if is_copied(state, copy_key, now) else "⧉ Copy"
    button = gr.Button(label, size="sm", variant="secondary", scale=0, min_width=100)

    button.click(
        fn=functools.partial(copy_prompt, copy_key),
        inputs=[clipboard_ok, view_state],
        outputs=[view_state],
        js=_clipboard_js(text),
    ).then(
        fn=wait_for_copy_indicator,
    ).then(
        fn=expire_copy_indicator,
        inputs=[view_state],
        outputs=[view_state],
    )
    return button


def _image_card(image: GeneratedImage, state: GeneratorViewState, view_state, download_file, clipboard_ok, now: float):
    """Render one gallery entry."""
    with gr.Group():
        gr.Image(
            value=image.image_url,
            label=image.original_prompt[:60],
            show_label=False,
            interactive=False,
        )
        gr.Markdown(f"`{image.size}` · `{image.quality.capitalize()}`")

        with gr.Row():
            gr.Markdown("**Original Prompt:**")
            _copy_button(image.original_prompt, image.original_copy_key, state, view_state, clipboard_ok, now)
        gr.Textbox(value=image.original_prompt, show_label=False, interactive=False, lines=2)

        if show_revised_prompt(image):
            with gr.Row():
                gr.Markdown("**AI Revised Prompt:**")
                _copy_button(image.revised_prompt, image.revised_copy_key, state, view_state, clipboard_ok, now)
            gr.Textbox(value=image.revised_prompt, show_label=False, interactive=False, lines=2)

        gr.Markdown(f"<small>Generated {image.timestamp:%Y-%m-%d %H:%M:%S}</small>")

        download_btn = gr.Button("⬇ Download Image", variant="secondary")
        download_btn.click(
            fn=functools.partial(download_image, image.id),
            inputs=[view_state],
            outputs=[download_file, view_state],
        )


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title="AI Image Generator", delete_cache=(3600, 3600))

    with app:
        # Session state - one instance per user
        view_state = gr.State(GeneratorViewState())

        gr.Markdown(
            """
            # ✨ AI Image Generator
            Transform your ideas into stunning visuals with AI-powered image generation.
            Simply describe what you want to see, and watch it come to life.
            """
        )

        with gr.Group():
            gr.Markdown("### 🪄 Create Your Image")
            prompt_input = gr.Textbox(
                label="Describe your image",
                placeholder=PROMPT_PLACEHOLDER,
                lines=4,
            )
            with gr.Row():
                size_dropdown = gr.Dropdown(
                    label="Size",
                    choices=SIZE_CHOICES,
                    value=SIZE_CHOICES[0][1],
                )
                quality_dropdown = gr.Dropdown(
                    label="Quality",
                    choices=QUALITY_CHOICES,
                    value=QUALITY_CHOICES[0][1],
                )
            generate_btn = gr.Button("✨ Generate Image", variant="primary", interactive=False)

        download_file = gr.File(label="Downloaded image", interactive=False)
        # Filled in by the browser with the result of each clipboard write
        clipboard_ok = gr.Checkbox(value=False, visible=False)

        @gr.render(inputs=[view_state])
        def render_gallery(state: GeneratorViewState):
            now = time.time()
            if not state.images:
                if not state.is_generating:
                    gr.Markdown(
                        """
                        ### 🖼 No images generated yet
                        Enter a creative prompt above and click "Generate Image" to create
                        your first AI-generated masterpiece!
                        """
                    )
                return

            gr.Markdown(f"## 🖼 Generated Images ({len(state.images)})")
            for image in state.images:
                _image_card(image, state, view_state, download_file, clipboard_ok, now)

        # Event wiring
        prompt_input.change(
            fn=update_prompt,
            inputs=[prompt_input, view_state],
            outputs=[view_state, generate_btn],
        )
        size_dropdown.change(
            fn=update_size,
            inputs=[size_dropdown, view_state],
            outputs=[view_state],
        )
        quality_dropdown.change(
            fn=update_quality,
            inputs=[quality_dropdown, view_state],
            outputs=[view_state],
        )
        generate_btn.click(
            fn=generate_image,
            inputs=[prompt_input, size_dropdown, quality_dropdown, view_state],
            outputs=[view_state, prompt_input, generate_btn],
        )

    return app


def main():
    """Main entry point for the UI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting PromptPix UI...")
    logger.info(f"Proxy URL: {config.proxy_url}")

    app = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        allowed_paths=[str(config.downloads_dir.resolve())],
    )


if __name__ == "__main__":
    main()
