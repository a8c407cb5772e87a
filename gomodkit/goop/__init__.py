"""Build Go module commands and manage the launch scripts that run them."""