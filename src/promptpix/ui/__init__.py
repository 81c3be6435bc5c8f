"""Gradio client for the PromptPix generation proxy.

Modules
-------
models
    GeneratedImage, Notification and the GeneratorViewState view-model.
state
    Pure reducers that move the view-model between states.
validation
    Prompt checks and download filename derivation.
client
    httpx client for the proxy and for image downloads.
handlers
    Gradio event handlers.
app
    Gradio Blocks layout and the ``main()`` entry point.
"""
