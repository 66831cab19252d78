# Company Settings API
