import gradio as gr
import numpy as np
import PIL.Image

from .color import unpack_pixels
from .core import create_scene

# Keep the previous frame visible while the next one renders.
CSS = """
#output_img img { object-fit: contain; }
#output_img.pending, #output_img .pending { opacity: 1 !important; }
#output_img .progress-view, #output_img .loader { display: none !important; }
"""


def create_ui():

    scene = create_scene(512, 320)
    state = {"buffer": np.zeros(512 * 320, dtype=np.uint32)}

    def render_frame(time_sec, resolution):
        # 16:10 frame; reallocate the pixel buffer on resize
        width = int(resolution)
        height = int(resolution * 0.625)
        if (width, height) != (scene.width, scene.height):
            scene.width = width
            scene.height = height
            state["buffer"] = np.zeros(width * height, dtype=np.uint32)

        scene.render(state["buffer"], time_sec)
        return PIL.Image.fromarray(unpack_pixels(state["buffer"], width, height))

    with gr.Blocks(title="Planet Shaders") as demo:

        gr.Markdown("# Planet Shaders")
        gr.Markdown("A star, a rocky planet with its moon and a ringed gas giant, ray traced on the CPU.")

        with gr.Row():
            with gr.Column(scale=1):
                with gr.Group():
                    gr.Markdown("### Animation")
                    time_slider = gr.Slider(minimum=0, maximum=60, value=0, step=0.05,
                                            label="Time (seconds)", info="Drives orbits and shaders")
                    res_slider = gr.Slider(minimum=128, maximum=1024, value=512, step=64,
                                           label="Render Width", info="Lower for speed, higher for quality")
                    reset_btn = gr.Button("Reset", variant="secondary")

            with gr.Column(scale=2):
                output_img = gr.Image(label="Viewport", interactive=False, elem_id="output_img")

        inputs = [time_slider, res_slider]

        def reset_view():
            return [0.0, 512]

        reset_btn.click(fn=reset_view, outputs=inputs)

        for input_comp in inputs:
            input_comp.change(fn=render_frame, inputs=inputs, outputs=output_img,
                              trigger_mode="always_last", show_progress="hidden")

        demo.load(fn=render_frame, inputs=inputs, outputs=output_img, show_progress="hidden")

    return demo


if __name__ == "__main__":
    demo = create_ui()
    demo.launch(css=CSS)
