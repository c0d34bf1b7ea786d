# %%

from loop_cppn import RenderConfig, build_cppn, render_frame
from loop_cppn.vis import plot_frame, visualize_cppn_graph

config = RenderConfig(width=128, height=128, depth=4, size=8, seed=7)
cppn_net = build_cppn(config.network_config(), config.seed)

# %%
# first frame of the loop
frame = render_frame(cppn_net, config, theta=0)
plot_frame(frame)
visualize_cppn_graph(cppn_net)

# %%
